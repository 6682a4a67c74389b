"""Slug router - generation, uniqueness checks and live validation."""
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status

from app.config import settings
from app.dependencies import get_catalog_service, get_current_user
from app.models.slug import SlugCheck, SlugFormState, SlugScope, SlugSuggestion
from app.services.catalog_service import CatalogService
from app.services.slug_form import SlugForm
from app.utils.slug import normalize, resolve_unique

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slugs", tags=["slugs"])


@router.get("/normalize", response_model=SlugSuggestion)
async def normalize_name(name: str = Query(..., description="Display name")):
    """Derive a slug from a display name without checking uniqueness."""
    return SlugSuggestion(name=name, slug=normalize(name))


@router.get(
    "/{scope}/check",
    response_model=SlugCheck,
    dependencies=[Depends(get_current_user)],
)
async def check_slug(
    scope: SlugScope,
    slug: str = Query(..., description="Candidate slug"),
    exclude_id: Optional[int] = Query(None, alias="excludeId", description="Entity being edited"),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Check whether a slug is already used by another entity.

    The answer is advisory: a failed lookup reports the slug as free.
    """
    taken = await service.slug_oracle(scope).exists(slug, exclude_id)
    return SlugCheck(slug=slug, exclude_id=exclude_id, taken=taken)


@router.get(
    "/{scope}/unique",
    response_model=SlugSuggestion,
    dependencies=[Depends(get_current_user)],
)
async def unique_slug(
    scope: SlugScope,
    name: str = Query("", description="Display name"),
    exclude_id: Optional[int] = Query(None, alias="excludeId", description="Entity being edited"),
    service: CatalogService = Depends(get_catalog_service),
):
    """Generate a free slug from a display name, adding -2, -3, ... if needed."""
    oracle = service.slug_oracle(scope)
    slug = await resolve_unique(name, oracle.excluding(exclude_id))
    return SlugSuggestion(name=name, slug=slug)


async def _send_states(websocket: WebSocket, states: "asyncio.Queue[SlugFormState]") -> None:
    while True:
        state = await states.get()
        await websocket.send_json(state.model_dump(mode="json", by_alias=True))


@router.websocket("/{scope}/live")
async def live_slug(
    websocket: WebSocket,
    scope: SlugScope,
    exclude_id: Optional[int] = Query(None, alias="excludeId"),
    name: str = Query(""),
    slug: str = Query(""),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Live slug validation for one create/edit dialog.

    Client messages:
        ``{"field": "name", "value": "..."}`` name field changed
        ``{"field": "slug", "value": "..."}`` slug field edited
        ``{"action": "regenerate"}`` replace the slug with a unique one
        ``{"action": "finalize"}`` settle the slug to save with

    Every change of name, slug or status is answered with a
    ``SlugFormState`` message.
    """
    if service.auth.current_user() is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()

    states: asyncio.Queue[SlugFormState] = asyncio.Queue()
    form = SlugForm(
        service.slug_oracle(scope),
        entity_id=exclude_id,
        name=name,
        slug=slug,
        delay=settings.slug_check_debounce,
        timeout=settings.slug_check_timeout,
        on_change=states.put_nowait,
    )
    sender = asyncio.create_task(_send_states(websocket, states))
    states.put_nowait(form.state)

    try:
        while True:
            message = await websocket.receive_json()
            if not isinstance(message, dict):
                logger.debug("Ignoring slug form message %r", message)
                continue
            field = message.get("field")
            action = message.get("action")

            if field == "name":
                form.set_name(str(message.get("value") or ""))
            elif field == "slug":
                form.set_slug(str(message.get("value") or ""))
            elif action == "regenerate":
                await form.regenerate()
            elif action == "finalize":
                await form.slug_for_save()
                states.put_nowait(form.state)
            else:
                logger.debug("Ignoring slug form message %r", message)
    except WebSocketDisconnect:
        logger.debug("Slug form for %s closed", scope.value)
    finally:
        form.close()
        sender.cancel()
        for result in await asyncio.gather(sender, return_exceptions=True):
            if isinstance(result, Exception):
                logger.debug("Slug form sender for %s stopped: %r", scope.value, result)
