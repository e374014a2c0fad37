# Routes package init
"""
Logo Designer Backend — API Routes Package
============================================

Route Inventory:
    - logos.py:   GET /api/logo/mobile                   (canonical list)
                  GET /api/logo/mobile/legacy            (legacy list)
                  GET /api/logo/{id}/mobile              (canonical document)
                  GET /api/logo/{id}/mobile/legacy       (legacy document)
    - health.py:  GET /health                            (database probe)

Routes stay thin: resolve language and paging, call the assembler, wrap the
result in an envelope.
"""
