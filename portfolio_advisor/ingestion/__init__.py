"""
Ingestion layer: loads the JSON snapshots the engines consume.

Submodules:
  snapshot_loader: catalog / profile / holdings JSON → validated models
"""
