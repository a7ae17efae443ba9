"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from document_gateway.config import get_settings
from document_gateway.application.services import (
    CatalogLoader,
    DocumentSearchService,
    DocumentService,
    PageCountEnrichmentService,
    TaxonomyRegistry,
)
from document_gateway.infrastructure.database.session import get_db_session
from document_gateway.infrastructure.database.repositories import SQLAlchemyPageCountRepository
from document_gateway.infrastructure.repository.http_document_repository import HttpDocumentRepository
from document_gateway.infrastructure.storage.http_document_downloader import HttpDocumentDownloader
from document_gateway.infrastructure.storage.s3_object_storage import LazyObjectStorage, S3ObjectStorage


@lru_cache
def get_taxonomy_registry() -> TaxonomyRegistry:
    """Process-wide catalog, loaded from YAML on first use."""
    settings = get_settings()
    return CatalogLoader(settings.catalog_path).load()


@lru_cache
def get_object_storage() -> S3ObjectStorage:
    """Long-lived S3 client shared by all requests."""
    settings = get_settings()
    return S3ObjectStorage(
        bucket_name=settings.s3_bucket_name,
        region=settings.s3_region,
        access_key_id=settings.s3_access_key_id,
        secret_access_key=settings.s3_secret_access_key,
    )


def get_document_repository() -> HttpDocumentRepository:
    """Provides the repository REST client configured from settings."""
    settings = get_settings()
    return HttpDocumentRepository(
        base_url=settings.repository_base_url,
        credentials=settings.repository_credentials,
        adhoc_query_path=settings.repository_adhoc_query_path,
        index_lookup_path=settings.repository_index_lookup_path,
        media_type=settings.repository_media_type,
        timeout=settings.repository_timeout,
    )


async def get_document_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DocumentService, None]:
    """Provides a DocumentService with repository, metadata store and object storage wired up."""
    settings = get_settings()

    search_service = DocumentSearchService(get_document_repository())
    enrichment_service = PageCountEnrichmentService(SQLAlchemyPageCountRepository(session))

    yield DocumentService(
        registry=get_taxonomy_registry(),
        search_service=search_service,
        enrichment_service=enrichment_service,
        object_storage=LazyObjectStorage(get_object_storage),
        downloader=HttpDocumentDownloader(),
        link_expiry_seconds=settings.presigned_url_expiry_seconds,
    )
