from .taxonomy_registry import TaxonomyRegistry, build_attribute_types, with_full_text_attribute
from .catalog_loader import CatalogLoader
from .filter_query_compiler import FilterQueryCompiler
from .visibility_filter import suppress
from .document_search_service import DocumentSearchService
from .page_count_enrichment import PageCountEnrichmentService, merge_page_counts
from .document_service import DocumentService

__all__ = [
    "TaxonomyRegistry",
    "build_attribute_types",
    "with_full_text_attribute",
    "CatalogLoader",
    "FilterQueryCompiler",
    "suppress",
    "DocumentSearchService",
    "PageCountEnrichmentService",
    "merge_page_counts",
    "DocumentService",
]
