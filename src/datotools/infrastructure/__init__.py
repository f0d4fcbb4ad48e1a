"""Infrastructure layer: the DatoCMS Content Management API over httpx.

This layer depends on stdlib and third-party libs (httpx).
It imports only error types and capability protocols from the domain layer.
"""
