"""
FOLIO - Flowing Output Layout for Itemized Openings

A layout engine that turns structured resume content into a two-column,
multi-page page plan (sidebar + main column, with full-width continuation
pages once the main column outgrows the sidebar).

Architecture:
- Document Context: Resume content model and YAML loading
- Layout Context: Section builders, pagination and page assembly
- Rendering Context: Export of assembled pages for downstream renderers
"""

__version__ = "0.1.0"
