import logging
import uuid

from fastapi import APIRouter, Query, Response, status

from .schemas import SamplePage, SampleRequest, SampleResponse
from .service import SampleService

logger = logging.getLogger(__name__)


def build_router(service: SampleService) -> APIRouter:
    router = APIRouter(prefix="/api/v1/samples", tags=["samples"])

    @router.post("", response_model=SampleResponse, status_code=status.HTTP_201_CREATED)
    def create_sample(payload: SampleRequest) -> SampleResponse:
        logger.info("POST /api/v1/samples identifier=%s", payload.sample_identifier)
        return service.create(payload)

    @router.get("", response_model=SamplePage)
    def list_samples(
        page: int = Query(default=0),
        size: int = Query(default=20),
        sort: str = Query(default="id", max_length=64),
    ) -> SamplePage:
        return service.list(page=page, size=size, sort=sort)

    @router.get("/{sample_id}", response_model=SampleResponse)
    def get_sample(sample_id: uuid.UUID) -> SampleResponse:
        return service.get(sample_id)

    @router.put("/{sample_id}", response_model=SampleResponse)
    def update_sample(sample_id: uuid.UUID, payload: SampleRequest) -> SampleResponse:
        logger.info("PUT /api/v1/samples/%s", sample_id)
        return service.update(sample_id, payload)

    @router.delete("/{sample_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
    def delete_sample(sample_id: uuid.UUID) -> Response:
        logger.info("DELETE /api/v1/samples/%s", sample_id)
        service.delete(sample_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
