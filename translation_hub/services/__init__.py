"""Translation store services: record store, filters, versioning, export."""
