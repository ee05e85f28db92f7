"""Infrastructure layer — filesystem access for fractal files.

This layer depends only on stdlib and numpy.
It must never import from domain, services, commands, or output.
The service layer bridges between domain models and infrastructure.
"""
