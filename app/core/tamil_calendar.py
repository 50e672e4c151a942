# app/core/tamil_calendar.py
"""
Tamil solar calendar.
Months follow the Sun through the 12 rasis (Chithirai = Mesha); years are named
from the 60-year cycle, 1987 CE = Prabhava.
"""
from __future__ import annotations

from datetime import date, datetime

from app.core.angles import angle_index
from app.core.ephemeris import EphemerisProvider
from app.core.models import TamilDate
from app.core.timings import weekday_index

RASI_SPAN = 30.0

TAMIL_MONTHS = (
    "Chithirai",  # Mesha
    "Vaikasi",    # Vrishabha
    "Aani",       # Mithuna
    "Aadi",       # Kataka
    "Aavani",     # Simha
    "Purattasi",  # Kanya
    "Aippasi",    # Tula
    "Karthigai",  # Vrischika
    "Margazhi",   # Dhanu
    "Thai",       # Makara
    "Maasi",      # Kumbha
    "Panguni",    # Meena
)

# Sunday = 0
TAMIL_WEEKDAYS = ("Nyairu", "Thingal", "Sevvai", "Budhan", "Viyazhan", "Velli", "Sani")

YEAR_NAMES = (
    "Prabhava", "Vibhava", "Shukla", "Pramodoota", "Prajotpatti",
    "Angirasa", "Srimukha", "Bhava", "Yuva", "Dhatu",
    "Eeshwara", "Vehudhanya", "Pramathi", "Vikrama", "Vrisha",
    "Chitrabhanu", "Svabhanu", "Tarana", "Parthiva", "Vyaya",
    "Sarvajit", "Sarvadhari", "Virodhi", "Vikruti", "Khara",
    "Nandana", "Vijaya", "Jaya", "Manmatha", "Durmukhi",
    "Hevilambi", "Vilambi", "Vikari", "Sharvari", "Plava",
    "Shubhakrut", "Shobhakrut", "Krodhi", "Vishvavasu", "Parabhava",
    "Plavanga", "Kilaka", "Saumya", "Sadharana", "Virodhikrut",
    "Paritapi", "Pramadeecha", "Ananda", "Rakshasa", "Nala",
    "Pingala", "Kalayukti", "Siddharthi", "Raudra", "Durmathi",
    "Dundubhi", "Rudhirodgari", "Raktakshi", "Krodhana", "Akshaya",
)
CYCLE_EPOCH_YEAR = 1987  # Prabhava

# Approximate Gregorian (month, day) on which each Tamil month begins
MONTH_START_DATES = (
    (4, 14), (5, 15), (6, 15), (7, 17), (8, 17), (9, 17),
    (10, 18), (11, 17), (12, 16), (1, 15), (2, 13), (3, 15),
)

MAX_MONTH_DAYS = 32


def tamil_month_index(sun_lon: float) -> int:
    return angle_index(sun_lon, RASI_SPAN, 12)


def tamil_day(d: date, month_index: int) -> int:
    start_month, start_day = MONTH_START_DATES[month_index]
    year = d.year
    if (start_month, start_day) > (d.month, d.day):
        # month began in the previous Gregorian year (Margazhi..Panguni, or not yet started)
        year -= 1

    month_start = date(year, start_month, start_day)
    day = (d - month_start).days + 1
    return max(1, min(day, MAX_MONTH_DAYS))


def tamil_year_name(d: date) -> str:
    new_year = MONTH_START_DATES[0]
    year = d.year
    if (d.month, d.day) < new_year:
        year -= 1
    return YEAR_NAMES[(year - CYCLE_EPOCH_YEAR) % 60]


def tamil_weekday(d: date) -> str:
    return TAMIL_WEEKDAYS[weekday_index(d) % 7]


def calc_tamil_date(eph: EphemerisProvider, d: date, sunrise: datetime) -> TamilDate:
    idx = tamil_month_index(eph.sun_longitude(sunrise))
    return TamilDate(
        month=TAMIL_MONTHS[idx],
        month_index=idx,
        day=tamil_day(d, idx),
        year=tamil_year_name(d),
        weekday=tamil_weekday(d),
    )
