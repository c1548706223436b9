from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from shortlink_app.schemas.link import ErrorResponse
from shortlink_app.services.link_service import LinkService
from shortlink_app.dependencies import get_link_service

router = APIRouter(tags=["redirect"])


@router.get(
    "/{code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={404: {"model": ErrorResponse}},
)
def redirect_to_target(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the target URL and record the click.
    
    The click is counted before the response goes out, so a following
    GET /links/{code} already shows it.
    """
    target_url = link_service.resolve_link(code)
    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)
