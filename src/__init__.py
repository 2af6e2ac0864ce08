"""TS-API - FastAPI scaffold with file-tree routing.

The directory tree under ``src/api/endpoints`` is the route table: each
Python file exports a router that is mounted under its directory path.

Architecture Overview:
- **API Layer**: FastAPI app factory, middleware, routing and endpoints
- **Core Layer**: Configuration, logging, request context and the error model

Key Features:
- **File-tree routing**: Adding a file adds its routes, no registration list
- **Fail-soft loading**: A broken endpoint file is logged and skipped
- **Uniform errors**: ApiErrors become JSON bodies, anything else a masked 500
- **Timing metadata**: Every JSON object response carries timestamp and duration
"""
