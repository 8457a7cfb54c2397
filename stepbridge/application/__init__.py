"""
Application layer module.

Request processing on top of the domain layer: the protocol processor,
the catalog formatter and the process wiring helpers.
"""
