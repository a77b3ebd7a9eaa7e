# chunkworld/runtime/calendar.py

"""
================================================================================
GAME CALENDAR
================================================================================
This module provides a self-contained class for tracking in-game days and
deriving the current Season and Weather from them. Those two values drive
the presentation-time colour transforms in chunkworld.seasons.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): Optional overrides for 'days_per_season',
      'seconds_per_day', 'initial_time_scale', 'initial_season' and
      'weather_probabilities'.
- Public Methods:
    - update(real_delta_time): Advances the calendar.
    - set_speed(new_scale): Changes the speed of time.
    - weather_for_day(day): The deterministic weather for any day index.
- Public Properties:
    - day, season, weather.
- Side Effects: None.
- Invariants: Season and weather are pure functions of the elapsed game time.
  Weather for a day is the same no matter how often or how finely the
  calendar is updated.
================================================================================
"""
from .. import config as DEFAULTS
from ..noise import seeded_random
from ..seasons import Season, Weather


class GameCalendar:
    """Manages days, seasons and daily weather."""

    def __init__(self, config: dict = None):
        config = config or {}

        # --- 1. Load Calendar Configuration (Rule 1) ---
        self.days_per_season = config.get('days_per_season', DEFAULTS.DAYS_PER_SEASON)
        self.seconds_per_day = config.get('seconds_per_day', DEFAULTS.SECONDS_PER_DAY)
        self.time_scale = max(0.0, config.get('initial_time_scale', DEFAULTS.INITIAL_TIME_SCALE))
        self.weather_probabilities = config.get('weather_probabilities', DEFAULTS.WEATHER_PROBABILITIES)
        self.weather_seed_offset = config.get('weather_seed_offset', DEFAULTS.WEATHER_SEED_OFFSET)

        if self.days_per_season < 1:
            raise ValueError(f"days_per_season must be at least 1, got {self.days_per_season}")
        if self.seconds_per_day <= 0:
            raise ValueError(f"seconds_per_day must be positive, got {self.seconds_per_day}")

        initial_season = Season(config.get('initial_season', DEFAULTS.INITIAL_SEASON))
        self._season_order = tuple(Season(name) for name in DEFAULTS.SEASON_ORDER)
        self._days_per_year = self.days_per_season * len(self._season_order)

        # --- 2. Initialize State Variables ---
        # Day zero is the first day of the initial season.
        self._day_offset = self._season_order.index(initial_season) * self.days_per_season
        self._total_seconds_elapsed = 0.0

        self.day = 0
        self.season = initial_season
        self.weather = Weather.CLEAR
        self._recalculate()

    def update(self, real_delta_time: float):
        """
        Advances the calendar by a given amount of real-world time.

        Args:
            real_delta_time (float): The time elapsed in the real world, in seconds.
        """
        if self.time_scale <= 0:
            return

        self._total_seconds_elapsed += real_delta_time * self.time_scale
        self._recalculate()

    def advance_days(self, days: int):
        """Skips forward a whole number of days."""
        self._total_seconds_elapsed += days * self.seconds_per_day
        self._recalculate()

    def set_speed(self, new_scale: float):
        """0 = paused, 1 = real-time, > 1 = fast-forward."""
        self.time_scale = max(0.0, new_scale)

    def season_for_day(self, day: int) -> Season:
        day_of_year = (day + self._day_offset) % self._days_per_year
        return self._season_order[day_of_year // self.days_per_season]

    def weather_for_day(self, day: int) -> Weather:
        """
        Draws the day's weather from the season's cumulative probabilities.
        The draw is seeded by the day index, so it never changes.
        """
        season = self.season_for_day(day)
        draw = float(seeded_random(float(day * DEFAULTS.WEATHER_SEED_STRIDE + self.weather_seed_offset)))

        probabilities = self.weather_probabilities[season.value]
        weather_name = None
        for weather_name, cumulative in probabilities.items():
            if draw < cumulative:
                break
        return Weather(weather_name)

    def get_date_string(self) -> str:
        year = (self.day + self._day_offset) // self._days_per_year + 1
        day_in_season = (self.day + self._day_offset) % self.days_per_season + 1
        return (f"Year {year}, {self.season.value.capitalize()} day {day_in_season} - "
                f"{self.weather.value}")

    def _recalculate(self):
        self.day = int(self._total_seconds_elapsed // self.seconds_per_day)
        self.season = self.season_for_day(self.day)
        self.weather = self.weather_for_day(self.day)
