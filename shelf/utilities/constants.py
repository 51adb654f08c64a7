from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Expiration status levels and their display attributes
EXPIRED: Final[str] = "expired"
EXPIRES_TODAY: Final[str] = "today"
WARNING: Final[str] = "warning"
NORMAL: Final[str] = "normal"

STATUS_COLORS: Final[dict[str, str]] = {
    EXPIRED: "red",
    EXPIRES_TODAY: "orange",
    WARNING: "yellow",
    NORMAL: "green",
}
STATUS_ICONS: Final[dict[str, str]] = {
    EXPIRED: "xmark.octagon.fill",
    EXPIRES_TODAY: "exclamationmark.circle.fill",
    WARNING: "exclamationmark.triangle.fill",
    NORMAL: "checkmark.circle.fill",
}
# Products expiring within this many days (inclusive) get the warning level
WARNING_WINDOW_DAYS: Final[int] = 3
# Group borders turn green from this many days left
FRESH_THRESHOLD_DAYS: Final[int] = 7

# Product sources
SOURCE_SPOONACULAR: Final[str] = "spoonacular"
SOURCE_OFFA: Final[str] = "offa"
SOURCE_MANUAL: Final[str] = "manual"
PRODUCT_SOURCES: Final[tuple[str, ...]] = (SOURCE_SPOONACULAR, SOURCE_OFFA, SOURCE_MANUAL)

# Recipe lookup
RECIPES_PER_PRODUCT: Final[int] = 4

WARNING_NOTIFICATION_TITLE: Final[str] = "Expiring In a Week"
EXPIRATION_NOTIFICATION_TITLE: Final[str] = "Expired"
