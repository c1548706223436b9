from typing import List

from fastapi import APIRouter, Depends, status
from shortlink_app.schemas.link import ErrorResponse, LinkCreate, LinkDeleted, LinkResponse
from shortlink_app.services.link_service import LinkService
from shortlink_app.dependencies import get_link_service

router = APIRouter(prefix="/links", tags=["links"])


@router.post(
    "",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def create_link(
    link_data: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a short link, with a custom code or a generated one"""
    return link_service.create_link(link_data.target_url, link_data.custom_code)


@router.get("", response_model=List[LinkResponse])
def list_links(link_service: LinkService = Depends(get_link_service)):
    """List all links, oldest first"""
    return link_service.list_links()


@router.get("/{code}", response_model=LinkResponse, responses={404: {"model": ErrorResponse}})
def get_link(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Get a link and its click stats (does not count as a click)"""
    return link_service.get_link(code)


@router.delete("/{code}", response_model=LinkDeleted, responses={404: {"model": ErrorResponse}})
def delete_link(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Delete a link; its code can be reused afterwards"""
    deleted_code = link_service.delete_link(code)
    return LinkDeleted(message="Link deleted successfully", code=deleted_code)
