from .schema import FeatureSchema, FeatureSlot, DEFAULT_SCHEMA, GROUPS
