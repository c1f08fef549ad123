"""HTTP and websocket API for the pacing engine."""
