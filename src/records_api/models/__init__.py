"""Models package: domain models, DTOs and ORM mappings."""
