"""HTTP server: REST API and WebSocket frame streaming for a live boarding scene."""
