from .loaders import build_resolver, load_work_order, parse_work_order, tier_of

__all__ = ["parse_work_order", "load_work_order", "tier_of", "build_resolver"]
