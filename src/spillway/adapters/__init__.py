"""Adapters (infrastructure) for SPILLWAY.

Provide concrete implementations of the capabilities declared in
`spillway.interfaces`: page pools for the memory tier and temp file providers
for the disk tier.

Dependency rule: may import `spillway.interfaces` and `spillway.config`; the
interfaces must not import this package.
"""
