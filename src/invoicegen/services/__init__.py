"""
Core services for invoicegen.

Modules:
- tax_engine: pure tax and total computation
- state_codec: Document <-> URL query string
- export: rendered surface -> single-page PDF, with image inlining
- pdf_renderer: WeasyPrint-backed document renderer (imported lazily by
  the export pipeline)

The session-wide export pipeline is built in ``invoicegen.state``.
"""
