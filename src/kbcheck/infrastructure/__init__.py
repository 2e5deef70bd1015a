"""Infrastructure layer — kubectl, HTTP, and the checklist log file.

This layer depends on stdlib, config models, and third-party libs (httpx).
It must never import from services, commands, or output.
The service layer bridges between domain descriptors and infrastructure.
"""
