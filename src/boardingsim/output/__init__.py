"""Output writers: Ovito XYZ frames, Octave scripts and JSON summaries."""

from boardingsim.output.octave import build_summary, format_octave, write_octave, write_summary
from boardingsim.output.ovito import OvitoWriter, format_frame, particle_color

__all__ = [
    "OvitoWriter",
    "build_summary",
    "format_frame",
    "format_octave",
    "particle_color",
    "write_octave",
    "write_summary",
]
