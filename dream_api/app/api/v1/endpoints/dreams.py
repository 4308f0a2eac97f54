"""
Dream endpoints for API v1.

These routes map the six dream operations one‑to‑one onto
``DreamService``.  Domain errors are translated into HTTP errors here:
``NotFoundError`` becomes 404 and ``ConflictError`` becomes 409.  The
service instance is created once in ``create_app`` and read from
``app.state``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from dream_api.app.core.exceptions import ConflictError, NotFoundError
from dream_api.app.schemas.dream import DreamCreate, DreamRead, DreamUpdate
from dream_api.app.services.dream_service import DreamService


router = APIRouter()


def get_dream_service(request: Request) -> DreamService:
    return request.app.state.dream_service


@router.get("", response_model=List[DreamRead])
async def list_dreams(service: DreamService = Depends(get_dream_service)) -> List[DreamRead]:
    """Return all dreams in storage order."""
    return await service.list_all()


@router.get("/{dream_id}", response_model=Optional[DreamRead])
async def get_dream(
    dream_id: str,
    service: DreamService = Depends(get_dream_service),
) -> Optional[DreamRead]:
    """Retrieve a single dream by its ID.

    Responds with ``null`` (HTTP 200) when the dream does not exist.
    """
    return await service.get_by_id(dream_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
async def create_dream(
    dream: DreamCreate,
    service: DreamService = Depends(get_dream_service),
) -> Response:
    """Create a new dream.

    ``id`` and ``version`` in the body are ignored.  The response has no
    body; the new resource is announced in the ``Location`` header.
    """
    try:
        created = await service.create(dream)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/dreams/{created.id}"},
    )


@router.put("/{dream_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_dream(
    dream_id: str,
    dream: DreamUpdate,
    service: DreamService = Depends(get_dream_service),
) -> None:
    """Update an existing dream.

    The path ID identifies the dream; an ``id`` in the body, if any,
    must match it.  Fields omitted from the body keep their values.
    """
    if dream.id is not None and dream.id != dream_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Dream id in body does not match path",
        )
    try:
        await service.update(dream_id, dream)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dream not found") from e
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return None


@router.delete("/{dream_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_dream(
    dream_id: str,
    service: DreamService = Depends(get_dream_service),
) -> None:
    """Delete a dream.  Returns 404 if it does not exist."""
    try:
        await service.delete(dream_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dream not found") from e
    return None


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_all_dreams(service: DreamService = Depends(get_dream_service)) -> None:
    """Delete every dream."""
    await service.delete_all()
    return None
