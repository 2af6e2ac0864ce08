"""HTTP API layer with FastAPI.

Key components:
- **main**: Application factory wiring middleware, built-in routes and the
  discovered endpoints
- **routing**: Directory-tree route discovery and dynamic endpoint mounting
- **middleware**: Request pipeline stages
  - Correlation IDs for log tracing
  - Timing fields on every JSON response
  - Request logging in debug mode
  - Centralized error translation and the not-found page
- **schemas**: Error response bodies
- **utils**: orjson-backed JSON responses
- **endpoints**: Endpoint modules; each file contributes one router

Adding a Python file that exports ``router`` under ``endpoints/`` adds its
routes, mounted under the file's directory path.
"""
