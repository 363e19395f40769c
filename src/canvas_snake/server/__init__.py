"""HTTP and WebSocket front end for browser play."""
