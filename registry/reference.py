"""
Static reference data: enumerations used for validation and equality filters,
and the Greek holiday calendar used to seed holiday reminders.
"""

from datetime import date, timedelta

MUNICIPALITIES = [
    "ΠΑΥΛΟΥ ΜΕΛΑ",
    "ΚΟΡΔΕΛΙΟΥ-ΕΥΟΣΜΟΥ",
    "ΑΜΠΕΛΟΚΗΠΩΝ-ΜΕΝΕΜΕΝΗΣ",
    "ΝΕΑΠΟΛΗΣ-ΣΥΚΕΩΝ",
    "ΘΕΣΣΑΛΟΝΙΚΗΣ",
    "ΚΑΛΑΜΑΡΙΑΣ",
    "ΑΛΛΟ",
]

ELECTORAL_DISTRICTS = ["Α ΘΕΣΣΑΛΟΝΙΚΗΣ", "Β ΘΕΣΣΑΛΟΝΙΚΗΣ"]

ESSO_LETTERS = ["Α", "Β", "Γ", "Δ", "Ε", "ΣΤ"]

MILITARY_RANKS = [
    "Στρατιώτης",
    "Δεκανέας",
    "Λοχίας",
    "Επιλοχίας",
    "Ανθυπολοχαγός",
    "Υπολοχαγός",
    "Λοχαγός",
    "Ταγματάρχης",
    "Αντισυνταγματάρχης",
    "Συνταγματάρχης",
    "Ταξίαρχος",
    "Υποστράτηγος",
    "Αντιστράτηγος",
    "Στρατηγός",
]

# Suggested request types; the stored request_type stays free text.
REQUEST_CATEGORIES = [
    "ΣΤΡΑΤΙΩΤΙΚΟ",
    "ΙΑΤΡΙΚΟ",
    "ΑΣΤΥΝΟΜΙΚΟ",
    "ΠΥΡΟΣΒΕΣΤΙΚΗ",
    "ΠΑΙΔΕΙΑΣ",
    "ΔΙΟΙΚΗΤΙΚΟ",
    "ΕΥΡΕΣΗ ΕΡΓΑΣΙΑΣ",
    "ΕΦΚΑ",
    "ΑΛΛΟ",
]

STATUS_PENDING = "ΕΚΚΡΕΜΕΙ"
STATUS_COMPLETED = "ΟΛΟΚΛΗΡΩΘΗΚΕ"
STATUS_REJECTED = "ΑΠΟΡΡΙΦΘΗΚΕ"

REQUEST_STATUSES = [STATUS_PENDING, STATUS_COMPLETED, STATUS_REJECTED]

REMINDER_HOLIDAY = "ΕΟΡΤΗ"
REMINDER_REQUEST = "ΑΙΤΗΜΑ"
REMINDER_GENERAL = "ΓΕΝΙΚΗ"

REMINDER_TYPES = [REMINDER_HOLIDAY, REMINDER_REQUEST, REMINDER_GENERAL]

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"

USER_ROLES = [ROLE_USER, ROLE_ADMIN]

FIXED_HOLIDAYS = [
    ((1, 1), "Πρωτοχρονιά"),
    ((1, 6), "Θεοφάνια"),
    ((3, 25), "25η Μαρτίου - Ευαγγελισμός"),
    ((5, 1), "Πρωτομαγιά"),
    ((8, 15), "Κοίμηση της Θεοτόκου"),
    ((10, 28), "28η Οκτωβρίου"),
    ((12, 25), "Χριστούγεννα"),
    ((12, 26), "Σύναξις Θεοτόκου"),
]

# Offsets in days from Orthodox Easter Sunday
EASTER_HOLIDAYS = [
    (-48, "Καθαρά Δευτέρα"),
    (-2, "Μεγάλη Παρασκευή"),
    (0, "Κυριακή του Πάσχα"),
    (1, "Δευτέρα του Πάσχα"),
    (50, "Αγίου Πνεύματος"),
]


def esso_years(today: date = None, count: int = 10) -> list:
    """Intake years offered for ESSO codes, newest first."""
    today = today or date.today()
    return [str(today.year - offset) for offset in range(count)]


# Years the Easter computation holds for
HOLIDAY_YEARS = range(1900, 2100)

def orthodox_easter(year: int) -> date:
    """
    Orthodox Easter Sunday in the Gregorian calendar (valid 1900-2099).

    Meeus' Julian algorithm, shifted by the 13 day Julian/Gregorian gap.
    """
    a = year % 4
    b = year % 7
    c = year % 19
    d = (19 * c + 15) % 30
    e = (2 * a + 4 * b - d + 34) % 7
    month = (d + e + 114) // 31
    day = (d + e + 114) % 31 + 1
    return date(year, month, day) + timedelta(days=13)


def holidays_for_year(year: int) -> list:
    """
    Greek national and religious holidays for a year.

    Returns:
        list: (date, name) tuples sorted by date
    """
    if year not in HOLIDAY_YEARS:
        raise ValueError(f"Year must be between {HOLIDAY_YEARS[0]} and {HOLIDAY_YEARS[-1]}")
    easter = orthodox_easter(year)
    holidays = [(date(year, month, day), name) for (month, day), name in FIXED_HOLIDAYS]
    holidays.extend((easter + timedelta(days=offset), name) for offset, name in EASTER_HOLIDAYS)
    return sorted(holidays)


def as_choices(values: list) -> list:
    return [(value, value) for value in values]
