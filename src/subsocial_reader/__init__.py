"""Read-side aggregation of Subsocial chain structs and IPFS content."""

__version__ = "0.1.0"
