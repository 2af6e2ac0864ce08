"""Dynamic loading and mounting of discovered endpoint modules.

Each discovered file is imported at runtime and must export a module-level
``router`` (a FastAPI ``APIRouter``). Valid routers are included in the
application under their entry's mount prefix. A module that fails to load
or exports no router is logged and skipped, so one broken endpoint file
never prevents the rest of the application from starting.
"""

import importlib.util
import re
import sys
from collections.abc import Iterable
from types import ModuleType

from fastapi import APIRouter, FastAPI
from loguru import logger

from src.api.constants import ENDPOINT_EXPORT_NAME, ENDPOINT_MODULE_PREFIX
from src.api.routing.discovery import RouteEntry
from src.core.exceptions import EndpointLoadError

_NON_IDENTIFIER = re.compile(r"\W")


def module_name_for(entry: RouteEntry) -> str:
    """Build the synthetic module name an endpoint file is imported under.

    Args:
        entry: The discovered endpoint.

    Returns:
        str: Dotted name unique to the entry's relative path.
    """
    parts = [*entry.relative_path.parent.parts, entry.relative_path.stem]
    return ".".join(
        [ENDPOINT_MODULE_PREFIX, *(_NON_IDENTIFIER.sub("_", part) for part in parts)]
    )


def _import_module(entry: RouteEntry) -> ModuleType:
    """Import an endpoint file as a fresh module.

    Raises:
        EndpointLoadError: If the file is not importable or raises while
            executing.
    """
    name = module_name_for(entry)
    spec = importlib.util.spec_from_file_location(name, entry.absolute_path)
    if spec is None or spec.loader is None:
        raise EndpointLoadError(entry.relative_path, "not a Python module")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(name, None)
        raise EndpointLoadError(
            entry.relative_path, f"{type(exc).__name__}: {exc}"
        ) from exc
    return module


def load_endpoint(entry: RouteEntry) -> APIRouter:
    """Load an endpoint module and return its exported router.

    Args:
        entry: The discovered endpoint.

    Returns:
        APIRouter: The router exported by the module.

    Raises:
        EndpointLoadError: If the module cannot be loaded or does not export
            an APIRouter.
    """
    module = _import_module(entry)

    router = getattr(module, ENDPOINT_EXPORT_NAME, None)
    if router is None:
        raise EndpointLoadError(
            entry.relative_path, f"missing '{ENDPOINT_EXPORT_NAME}' export"
        )
    if not isinstance(router, APIRouter):
        raise EndpointLoadError(
            entry.relative_path,
            f"'{ENDPOINT_EXPORT_NAME}' is a {type(router).__name__}, "
            "expected APIRouter",
        )
    return router


def include_endpoint(app: FastAPI, entry: RouteEntry, router: APIRouter) -> None:
    """Include an endpoint router in the application under its mount prefix.

    Raises:
        EndpointLoadError: If FastAPI rejects the router, for example a
            root-level route whose prefix and path are both empty.
    """
    # include_router rejects a bare "/" prefix
    prefix = "" if entry.mount_prefix == "/" else entry.mount_prefix
    try:
        app.include_router(router, prefix=prefix)
    except Exception as exc:
        raise EndpointLoadError(
            entry.relative_path, f"{type(exc).__name__}: {exc}"
        ) from exc


def mount_routes(app: FastAPI, entries: Iterable[RouteEntry]) -> list[RouteEntry]:
    """Mount every loadable endpoint on the application.

    Entries are mounted in the order given. Entries sharing a prefix are all
    mounted; the first matching route wins at request time.

    Args:
        app: The FastAPI application.
        entries: Discovered endpoints, usually from discover_routes().

    Returns:
        list[RouteEntry]: The entries that were mounted.
    """
    pending = list(entries)
    logger.info("Setting up routes")

    mounted: list[RouteEntry] = []
    for entry in pending:
        try:
            router = load_endpoint(entry)
            include_endpoint(app, entry, router)
        except EndpointLoadError as exc:
            logger.error(
                "Endpoint {} is invalid: {}",
                entry.relative_path.as_posix(),
                exc.reason,
                endpoint=entry.endpoint_name,
            )
            continue

        mounted.append(entry)
        logger.info(
            "Loaded {}", entry.endpoint_name, mount_prefix=entry.mount_prefix
        )

    logger.info("Routes registered: {} of {} endpoints", len(mounted), len(pending))
    return mounted
