"""Document-request API controller — catalog browsing, listings and PDF retrieval."""

import dataclasses

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from document_gateway.application.schemas.document_request import (
    AttributeSchema,
    AttributeTypeSchema,
    CategoryFilterRequest,
    CategorySchema,
    DocumentListSchema,
    EntitySchema,
    EntrySchema,
    FilterTypeSchema,
)
from document_gateway.application.services.document_service import DocumentService
from document_gateway.domain.entities import (
    Attribute,
    AttributeType,
    Category,
    Entity,
    NormalizedResult,
)
from document_gateway.domain.exceptions import (
    DocumentNotFoundError,
    DocumentUnavailableError,
    EntityNotFoundError,
    RepositoryError,
)
from document_gateway.infrastructure.dependencies import get_document_service

router = APIRouter(prefix="/document-request", tags=["document-request"])


# ── Helpers ──────────────────────────────────────────────────────────


def _to_type_schema(attribute_type: AttributeType) -> AttributeTypeSchema:
    return AttributeTypeSchema(
        name=attribute_type.name.value,
        filter_types=[FilterTypeSchema(name=f.name) for f in attribute_type.filter_types],
    )


def _to_attribute_schema(attribute: Attribute) -> AttributeSchema:
    return AttributeSchema(
        field_number=attribute.field_number,
        name=attribute.name,
        type=_to_type_schema(attribute.type),
        filter_value1=attribute.filter_value1,
        filter_value2=attribute.filter_value2,
        selected_filter_type=(
            FilterTypeSchema(name=attribute.selected_filter_type.name)
            if attribute.selected_filter_type else None
        ),
    )


def _to_category_schema(category: Category) -> CategorySchema:
    return CategorySchema(
        id=category.id,
        name=category.name,
        display_name=category.display_name,
        entity_id=category.entity_id,
        attributes=[_to_attribute_schema(a) for a in category.attributes],
    )


def _to_entity_schema(entity: Entity) -> EntitySchema:
    return EntitySchema(
        id=entity.id,
        name=entity.name,
        categories=[_to_category_schema(c) for c in entity.categories],
    )


def _to_list_schema(
    result: NormalizedResult, page_counts_available: bool | None = None
) -> DocumentListSchema:
    return DocumentListSchema(
        columns=result.columns,
        entries=[
            EntrySchema(id=e.id, page_count=e.page_count, index_values=e.index_values)
            for e in result.entries
        ],
        total=len(result.entries),
        page_counts_available=page_counts_available,
    )


def _apply_filters(category: Category, body: CategoryFilterRequest) -> Category:
    """Copy the client's filter selections onto the catalog category.

    Attributes are matched by field number, falling back to name; types
    always come from the catalog. Unmatched selections are dropped.
    """
    selections = {}
    for requested in body.attributes:
        if requested.selected_filter_type is None:
            continue
        target = None
        if requested.field_number is not None:
            target = next(
                (a for a in category.attributes if a.field_number == requested.field_number),
                None,
            )
        if target is None and requested.name:
            target = category.find_attribute(requested.name)
        if target is None:
            continue

        filter_type = target.type.find_filter_type(requested.selected_filter_type.name)
        if filter_type is None:
            continue
        selections[target.field_number] = dataclasses.replace(
            target,
            filter_value1=requested.filter_value1,
            filter_value2=requested.filter_value2,
            selected_filter_type=filter_type,
        )

    attributes = tuple(selections.get(a.field_number, a) for a in category.attributes)
    return dataclasses.replace(category, attributes=attributes)


def _bad_gateway(exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Document repository unavailable: {exc}",
    )


# ── Catalog Endpoints ────────────────────────────────────────────────


@router.get("/entities", response_model=list[EntitySchema])
async def get_entities(
    service: DocumentService = Depends(get_document_service),
):
    """List all entities. Each entity has a distinct set of categories."""
    return [_to_entity_schema(e) for e in service.list_entities()]


@router.get("/attribute-types", response_model=list[AttributeTypeSchema])
async def get_attribute_types(
    service: DocumentService = Depends(get_document_service),
):
    """List attribute types and the filter operators each supports."""
    return [_to_type_schema(t) for t in service.list_attribute_types()]


@router.get("/document-categories/{entity_name}", response_model=EntitySchema)
async def get_document_categories(
    entity_name: str,
    service: DocumentService = Depends(get_document_service),
):
    """Get one entity with its document categories."""
    entity = service.get_entity(entity_name)
    if entity is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entity '{entity_name}' not found",
        )
    return _to_entity_schema(entity)


# ── Document Endpoints ───────────────────────────────────────────────


@router.post("/filtered-document-list", response_model=DocumentListSchema)
async def get_filtered_document_list(
    body: CategoryFilterRequest,
    service: DocumentService = Depends(get_document_service),
):
    """Run the body's filter selections against the category's repository, with page counts."""
    category = service.get_category(body.entity_id, body.id)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category '{body.id}' not found",
        )

    try:
        listing = await service.filter_documents(_apply_filters(category, body))
    except RepositoryError as exc:
        raise _bad_gateway(exc)
    return _to_list_schema(listing.result, listing.page_counts_available)


@router.get("/document-list/{entity_name}/{category_name}", response_model=DocumentListSchema)
async def get_document_list(
    entity_name: str,
    category_name: str,
    service: DocumentService = Depends(get_document_service),
):
    """List every public document in a category, with page counts."""
    category = service.get_category_by_name(entity_name, category_name)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category '{category_name}' not found",
        )

    try:
        listing = await service.list_all_documents(category.entity_id, category.id)
    except EntityNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except RepositoryError as exc:
        raise _bad_gateway(exc)
    return _to_list_schema(listing.result, listing.page_counts_available)


@router.get(
    "/get-document/{entity_name}/{category_name}/{document_id}",
    responses={200: {"content": {"application/pdf": {}}}},
)
async def get_document(
    entity_name: str,
    category_name: str,
    document_id: int,
    service: DocumentService = Depends(get_document_service),
):
    """Stream the PDF of a public document."""
    try:
        body = await service.open_document(entity_name, category_name, document_id)
    except DocumentNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    except DocumentUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    except RepositoryError as exc:
        raise _bad_gateway(exc)

    return StreamingResponse(
        body,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{document_id}.pdf"'},
    )
