from .entity_mapper import EntityMapper
from .mapper_resolver import EntityMapperResolver, MapperFactory

__all__ = ["EntityMapper", "EntityMapperResolver", "MapperFactory"]
