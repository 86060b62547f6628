"""API routes for images."""
from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from .deps import get_image_service
from .schemas import (
    CreateImageRequest,
    DownloadImageResponse,
    EmptyResponse,
    ImageOut,
    ImageResponse,
    ListImagesResponse,
    decode_bytes,
    encode_bytes,
)
from ..services import IMAGES_COLLECTION, ImageService
from ..store import format_name

router = APIRouter(prefix="/v1/images", tags=["images"])


@router.post("", response_model=ImageResponse)
async def create_image(req: CreateImageRequest, service: ImageService = Depends(get_image_service)):
    """Upload an image. A PNG preview is generated before it is stored."""
    data = decode_bytes(req.image.data, "data")
    # Decoding and resizing are CPU-bound
    image = await run_in_threadpool(service.create_image, req.image.filename, data)
    return ImageResponse(image=ImageOut.from_image(image))


@router.get("", response_model=ListImagesResponse)
async def list_images(
    page_size: int = 0,
    page_token: str = "",
    service: ImageService = Depends(get_image_service),
):
    """List images, newest first."""
    page = service.list_images(page_size=page_size, page_token=page_token)
    return ListImagesResponse(
        images=[ImageOut.from_image(i) for i in page.items],
        next_page_token=page.next_page_token,
    )


# Registered before "/{image_id}" so the ":download" suffix is not swallowed
@router.get("/{image_id}:download", response_model=DownloadImageResponse)
async def download_image(image_id: str, service: ImageService = Depends(get_image_service)):
    """Download the original image bytes."""
    data, mime_type = service.download_image(format_name(IMAGES_COLLECTION, image_id))
    return DownloadImageResponse(data=encode_bytes(data), mime_type=mime_type)


@router.get("/{image_id}", response_model=ImageResponse)
async def get_image(image_id: str, service: ImageService = Depends(get_image_service)):
    """Get image metadata and preview."""
    image = service.get_image(format_name(IMAGES_COLLECTION, image_id))
    return ImageResponse(image=ImageOut.from_image(image))


@router.delete("/{image_id}", response_model=EmptyResponse)
async def delete_image(image_id: str, service: ImageService = Depends(get_image_service)):
    """Delete an image and its preview."""
    service.delete_image(format_name(IMAGES_COLLECTION, image_id))
    return EmptyResponse()
