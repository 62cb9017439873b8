# src/subsocial_reader/schemas/__init__.py
"""
Pydantic schemas for chain structs, IPFS content and the entities built from them.

Import from the submodules directly; `entity` depends on the visibility rules in
`subsocial_reader.services.visibility`, which in turn needs `query`.
"""
