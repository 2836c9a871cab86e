# PHM/backend/phm/constants.py

# pricePerTon is a monthly rate, prorated by day against this month length
MONTH_DAYS = 30
SECONDS_PER_DAY = 24 * 60 * 60

# Transport availability is free text; only this exact value is bookable
AVAILABLE = "Available"
BOOKED_MARKER = "Booked for {month}/{day}/{year}"

# Dashboard variants, keyed by UserType value
DASHBOARD_VARIANTS = {
    "farmer": "farmer-buyer",
    "buyer": "farmer-buyer",
    "storage": "storage-provider",
    "transporter": "transporter",
    "cooperative": "cooperative",
}

# Fields and headers never written to the logs
SENSITIVE_HEADERS = ["authorization", "cookie", "set-cookie"]
SENSITIVE_FIELDS = ["password", "currentPassword", "newPassword", "confirmPassword", "token", "secret"]
MAX_LOGGED_CHARS = 1000
MAX_LOGGED_ITEMS = 20
