# ============================================================================
# API ROUTES
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - FastAPI route definitions
# PURPOSE: HTTP endpoints for action administration
# CREATED: 15 OCT 2026
# ============================================================================
"""
API Routes

FastAPI routes for the action dispatch engine: token maps, reverse
lookup, synchronization, invocation and configured instance CRUD.

Routes are plain (sync) functions; FastAPI runs them in its threadpool,
so every request gets its own dispatch depth counter.
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from core.models import SyncReport
from handlers.registry import HandlerNotFoundError
from repositories.base import ActionNotFoundError, RepositoryError
from .schemas import (
    InvokeRequest,
    InvokeResult,
    InvokeResponse,
    InstanceCreate,
    InstanceResponse,
    TokenMapResponse,
    LookupResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================
# These will be set by the main app at startup

_dispatcher = None
_synchronizer = None
_registry_service = None
_token_service = None
_action_service = None


def set_services(dispatcher, synchronizer, registry_service, token_service, action_service):
    """Set service instances for dependency injection."""
    global _dispatcher, _synchronizer, _registry_service, _token_service, _action_service
    _dispatcher = dispatcher
    _synchronizer = synchronizer
    _registry_service = registry_service
    _token_service = token_service
    _action_service = action_service


def _require(service, name: str):
    if service is None:
        raise HTTPException(500, f"{name} not initialized")
    return service


def get_dispatcher():
    return _require(_dispatcher, "Dispatcher")


def get_synchronizer():
    return _require(_synchronizer, "Synchronizer")


def get_registry_service():
    return _require(_registry_service, "Registry service")


def get_token_service():
    return _require(_token_service, "Token service")


def get_action_service():
    return _require(_action_service, "Action service")


# ============================================================================
# TOKEN MAPS
# ============================================================================

@router.get("/actions", response_model=TokenMapResponse, tags=["Actions"])
def list_actions():
    """
    Token map of every persisted action.
    """
    service = get_registry_service()
    try:
        actions = service.token_map()
    except RepositoryError as e:
        logger.exception(f"Error listing actions: {e}")
        raise HTTPException(500, str(e))

    return TokenMapResponse(actions=actions, total=len(actions))


@router.get("/actions/catalog", response_model=TokenMapResponse, tags=["Actions"])
def list_catalog():
    """
    Token map of every handler in the catalog, persisted or not.
    """
    actions = get_token_service().catalog_token_map()
    return TokenMapResponse(actions=actions, total=len(actions))


@router.get(
    "/actions/lookup/{token}",
    response_model=LookupResponse,
    tags=["Actions"],
    responses={404: {"model": ErrorResponse}},
)
def lookup_token(token: str):
    """
    Resolve a token back to the identity it was derived from.
    """
    ref = get_token_service().reverse_lookup(token)
    if ref is None:
        raise HTTPException(404, f"No action matches token: {token}")

    return LookupResponse(token=token, kind=ref.kind, identity=ref.key)


# ============================================================================
# SYNCHRONIZATION
# ============================================================================

@router.post("/actions/sync", response_model=SyncReport, tags=["Synchronization"])
def synchronize(
    delete_orphans: bool = Query(False, description="Remove orphaned rows instead of reporting them"),
):
    """
    Reconcile the registry with the handler catalog.

    New handlers get a row; orphaned rows are reported, or removed when
    delete_orphans is set. Per-row failures are listed in the report.
    """
    synchronizer = get_synchronizer()
    try:
        return synchronizer.synchronize(delete_orphans=delete_orphans)
    except RepositoryError as e:
        logger.exception(f"Synchronization failed: {e}")
        raise HTTPException(500, str(e))


@router.delete("/actions/orphans", response_model=SyncReport, tags=["Synchronization"])
def remove_orphans():
    """
    Synchronize and remove every orphaned row.

    Target of the remediation link in the orphan warning.
    """
    return synchronize(delete_orphans=True)


# ============================================================================
# INVOCATION
# ============================================================================

@router.post("/actions/invoke", response_model=InvokeResponse, tags=["Invocation"])
def invoke_actions(request: InvokeRequest):
    """
    Invoke a batch of actions against a subject.

    Unresolved identifiers and handlers that raise come back with
    result false; the rest of the batch still runs. An empty result list
    means the nesting limit was reached.
    """
    dispatcher = get_dispatcher()

    subject = dict(request.subject) if request.subject is not None else None
    context = {**request.context, "hook": request.hook}

    results = dispatcher.invoke(request.identifiers, subject, context)

    return InvokeResponse(
        hook=request.hook,
        results=[
            InvokeResult(identifier=identifier, result=result)
            for identifier, result in results.items()
        ],
        subject=subject,
    )


# ============================================================================
# CONFIGURED INSTANCES
# ============================================================================

@router.post(
    "/actions/instances",
    response_model=InstanceResponse,
    status_code=201,
    tags=["Instances"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid parameters"},
        404: {"model": ErrorResponse, "description": "Unknown callback or instance"},
    },
)
def save_instance(request: InstanceCreate):
    """
    Create a configured instance, or update one when aid is given.
    """
    service = get_action_service()

    try:
        action = service.save(
            callback=request.callback,
            type=request.type,
            parameters=request.parameters,
            label=request.label,
            aid=request.aid,
        )
    except HandlerNotFoundError:
        raise HTTPException(404, f"Handler not found: {request.callback}")
    except ActionNotFoundError:
        raise HTTPException(404, f"Action not found: {request.aid}")
    except ValueError as e:
        raise HTTPException(400, str(e))
    except RepositoryError as e:
        logger.exception(f"Error saving action: {e}")
        raise HTTPException(500, str(e))

    return InstanceResponse.model_validate(action)


@router.get(
    "/actions/instances/{aid}",
    response_model=InstanceResponse,
    tags=["Instances"],
    responses={404: {"model": ErrorResponse}},
)
def get_instance(aid: int):
    """
    Get one configured instance.
    """
    service = get_action_service()
    try:
        action = service.load(aid)
    except ActionNotFoundError:
        raise HTTPException(404, f"Action not found: {aid}")

    return InstanceResponse.model_validate(action)


@router.delete(
    "/actions/instances/{aid}",
    response_model=InstanceResponse,
    tags=["Instances"],
    responses={404: {"model": ErrorResponse}},
)
def delete_instance(aid: int):
    """
    Delete a configured instance and notify deletion listeners.
    """
    service = get_action_service()
    try:
        action = service.delete(aid)
    except ActionNotFoundError:
        raise HTTPException(404, f"Action not found: {aid}")
    except RepositoryError as e:
        logger.exception(f"Error deleting action {aid}: {e}")
        raise HTTPException(500, str(e))

    logger.info(f"Deleted action {aid}")
    return InstanceResponse.model_validate(action)
