# Services package init
"""
Logo Designer Backend — Services Layer
========================================

What:  Business logic between routes (HTTP) and the database (persistence).
Why:   Routes handle HTTP and envelopes; services own document assembly and
       the transforms it depends on.

Service Inventory (leaves first):
    - localizer:          language resolution, bilingual field selection,
                          message catalog, localized dates
    - legacy_format:      canonical → legacy gradient/background translation
    - logo_repository:    the SELECT statements of the read path
    - document_assembler: orchestrates fetch → project → build
"""
