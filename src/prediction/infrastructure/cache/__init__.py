from .pattern_cache import CacheKey, PatternCache
