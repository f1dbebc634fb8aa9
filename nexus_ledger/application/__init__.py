"""Application layer: use cases, DTOs and the ledger store lifecycle."""
