"""
Application services layer (use cases).

Services chain the upstream gateway and the response normalizers to fulfill
the catalog use cases (listings, detail, episodes, streams).

This layer contains:
- normalization/: pure mapping of upstream JSON to canonical records
- catalog: per-provider catalog operations
"""
