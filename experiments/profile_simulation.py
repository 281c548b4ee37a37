"""Profile tick_scene() to identify performance bottlenecks."""

import cProfile
import pstats
import time
from io import StringIO

from boardingsim.config import BoardingConfig
from boardingsim.engine.boarding import BoardingStrategy
from boardingsim.engine.scenario import create_scene
from boardingsim.engine.simulation import run_scene, tick_scene
from boardingsim.model.scene import BoardingScene


def create_test_scene(strategy: BoardingStrategy = BoardingStrategy.BACK_TO_FRONT) -> BoardingScene:
    """Create the reference 168-passenger scene with a fixed seed."""
    return create_scene(BoardingConfig(strategy=strategy, seed=42))


def measure_tick_rate(scene: BoardingScene, num_ticks: int) -> tuple[float, int]:
    """Measure ticks per second and the number of seated passengers afterwards."""
    start_time = time.perf_counter()

    for _ in range(num_ticks):
        tick_scene(scene)

    elapsed = time.perf_counter() - start_time
    ticks_per_sec = num_ticks / elapsed if elapsed > 0 else 0
    return ticks_per_sec, scene.seated_count


def profile_tick_scene(scene: BoardingScene, num_ticks: int) -> str:
    """Profile tick_scene and return profiling results."""
    profiler = cProfile.Profile()

    profiler.enable()
    for _ in range(num_ticks):
        tick_scene(scene)
    profiler.disable()

    stats_stream = StringIO()
    stats = pstats.Stats(profiler, stream=stats_stream)
    stats.sort_stats("cumulative")
    stats.print_stats(30)

    return stats_stream.getvalue()


def time_full_run(strategy: BoardingStrategy) -> tuple[float, float, int]:
    """Run a whole boarding and return (wall seconds, simulated seconds, ticks)."""
    scene = create_test_scene(strategy)
    start_time = time.perf_counter()
    ticks = run_scene(scene)
    elapsed = time.perf_counter() - start_time
    return elapsed, scene.time, ticks


def main():
    print("=" * 60)
    print("Performance Profiling: tick_scene()")
    print("=" * 60)

    scene = create_test_scene()
    print(f"\nScene setup: {len(scene.particles)} passengers, {len(scene.walls)} walls")
    print(f"Time step: {scene.time_step}s")

    print("\nWarm-up run (100 ticks)...")
    measure_tick_rate(scene, 100)

    print("\n--- Tick Rate (2000 ticks) ---")
    scene = create_test_scene()
    ticks_per_sec, seated = measure_tick_rate(scene, 2000)
    realtime_factor = ticks_per_sec * scene.time_step
    print(f"Tick rate: {ticks_per_sec:.1f} ticks/sec")
    print(f"Simulated seconds per wall second: {realtime_factor:.2f}")
    print(f"Seated after {scene.time:.1f}s: {seated}")

    print("\n--- Profiling Breakdown (1000 ticks) ---")
    scene = create_test_scene()
    print(profile_tick_scene(scene, 1000))

    print("\n--- Full Boarding per Strategy ---")
    results = {}
    for strategy in BoardingStrategy:
        elapsed, simulated, ticks = time_full_run(strategy)
        results[strategy] = simulated
        print(f"{strategy.value:>14}: boarded in {simulated:.1f}s ({ticks} ticks, {elapsed:.1f}s wall)")

    print("\n" + "=" * 60)
    print("Performance Assessment")
    print("=" * 60)

    all_passed = True

    # The server streams one frame per tick, so it needs at least real time.
    if realtime_factor >= 1.0:
        print(f"✓ PASS: {realtime_factor:.1f}x real time (target: 1x)")
    else:
        print(f"✗ FAIL: {realtime_factor:.2f}x real time (target: 1x)")
        all_passed = False

    duration = BoardingConfig().duration
    unfinished = [s.value for s, simulated in results.items() if simulated > duration]
    if not unfinished:
        print(f"✓ PASS: Every strategy boarded within {duration:.0f}s")
    else:
        print(f"✗ FAIL: Hit the duration limit: {', '.join(unfinished)}")
        all_passed = False

    print()
    if all_passed:
        print("All performance tests PASSED!")
    else:
        print("Some performance tests FAILED.")


if __name__ == "__main__":
    main()
