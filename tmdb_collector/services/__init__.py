"""
Application services layer (use cases).

Services orchestrate the domain logic to fulfill application use cases:
- TrailerResolver: best trailer for one entry, with locale fallback
- TrailerEnricherService: bounded-concurrency enrichment of a page
- CollectorService: discovery -> enrichment -> persistence, page by page

Services depend on ports (interfaces) from core/ and on the API error
taxonomy, never on the concrete HTTP or SQL implementations.
"""
