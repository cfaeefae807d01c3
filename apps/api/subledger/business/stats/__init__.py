from subledger.business.stats.schemas import RevenueStatsRead

__all__ = [
    "RevenueStatsRead",
]
