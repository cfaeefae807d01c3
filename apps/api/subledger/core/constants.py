SECONDS_PER_DAY = 86400
SECONDS_PER_MONTH = 30 * SECONDS_PER_DAY

MIN_SUBSCRIPTION_AMOUNT = 1000
MAX_BULK_SUBSCRIBERS = 50
MAX_SUBSCRIBER_LENGTH = 128

# Granted on every successful subscribe, whatever the plan.
PLAN_SERVICES: tuple[str, ...] = ("streaming", "downloads", "api-access", "premium-support")
PREMIUM_SERVICES: tuple[str, ...] = ("premium-features", "priority-support", "beta-access")

# Longest term a single request may buy.
MAX_DURATION_MONTHS = 1200
INT64_MAX = 2**63 - 1
