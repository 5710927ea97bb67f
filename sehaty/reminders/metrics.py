from prometheus_client import Counter


reminders_created_total = Counter(
    "reminders_created_total",
    "Total per-day reminder records created",
)

reminder_statuses_marked_total = Counter(
    "reminder_statuses_marked_total",
    "Total daily statuses set through mark-taken",
    ["status"],
)

reminder_daily_statuses_seeded_total = Counter(
    "reminder_daily_statuses_seeded_total",
    "Daily status entries created lazily on first lookup",
)
