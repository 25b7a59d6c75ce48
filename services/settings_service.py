"""
Settings Service
================
User preferences stored as typed key/value rows (see models.settings).

The growth target and default unit size are stored as ratios; the update
form works in percentages.  Changing the growth target re-projects the
capital schedule in the same transaction, keeping every month's recorded
current capital.
"""
from flask import current_app

from models.settings import Settings
from services.capital_service import CapitalService
from services.exceptions import InvalidInput
from utils.db_helpers import unit_of_work
from utils.money import to_decimal


THEMES = ('light', 'dark', 'system')

NOTIFICATION_KEYS = {
    'streak_warnings': 'notifications.streak_warnings',
    'monthly_goal_reminders': 'notifications.monthly_goal_reminders',
    'weekly_plan_reminders': 'notifications.weekly_plan_reminders',
}


class SettingsService:

    @staticmethod
    def _defaults():
        cfg = current_app.config
        return [
            ('monthly_growth_target', cfg['DEFAULT_GROWTH_TARGET'], 'Monthly capital growth target (ratio)', 'float'),
            ('default_unit_size', cfg['DEFAULT_UNIT_SIZE'], 'Default stake as a share of month capital (ratio)', 'float'),
            ('theme', 'system', 'Colour theme', 'string'),
        ] + [
            (key, True, f'Notification toggle: {name}', 'boolean')
            for name, key in NOTIFICATION_KEYS.items()
        ]

    @staticmethod
    def get_or_initialize():
        """Return settings as a dict, storing defaults for any missing key."""
        missing = [row for row in SettingsService._defaults() if Settings.get_value(row[0]) is None]
        if missing:
            with unit_of_work('initialize settings'):
                for key, value, description, setting_type in missing:
                    Settings.set_value(key, value, description, setting_type)
        return SettingsService.to_dict()

    @staticmethod
    def to_dict():
        return {
            'monthly_growth_target': Settings.get_value('monthly_growth_target'),
            'default_unit_size': Settings.get_value('default_unit_size'),
            'theme': Settings.get_value('theme'),
            'notifications': {
                name: Settings.get_value(key, True)
                for name, key in NOTIFICATION_KEYS.items()
            },
        }

    @staticmethod
    def default_unit_size():
        value = Settings.get_value('default_unit_size', current_app.config['DEFAULT_UNIT_SIZE'])
        return to_decimal(value)

    @staticmethod
    def update(monthly_growth_target, default_unit_size, theme='system', notifications=None):
        """
        Save settings from percentages.

        Args:
            monthly_growth_target: percent, 0 < x <= 100
            default_unit_size:     percent, 0 < x <= 100
            theme:                 'light', 'dark' or 'system'
            notifications:         dict of toggle name -> bool

        When the growth target changes the capital schedule is re-projected.
        """
        growth = to_decimal(monthly_growth_target)
        unit_size = to_decimal(default_unit_size)
        if growth <= 0 or growth > 100:
            raise InvalidInput('Monthly growth target must be greater than 0% and at most 100%')
        if unit_size <= 0 or unit_size > 100:
            raise InvalidInput('Default unit size must be greater than 0% and at most 100%')
        if theme not in THEMES:
            raise InvalidInput(f'Theme must be one of {", ".join(THEMES)}')

        growth_ratio = growth / 100
        current = SettingsService.get_or_initialize()
        capital = CapitalService.get_capital()
        if capital is not None:
            growth_changed = to_decimal(capital.monthly_growth_target) != growth_ratio
        else:
            growth_changed = to_decimal(current['monthly_growth_target']) != growth_ratio

        with unit_of_work('update settings'):
            Settings.set_value('monthly_growth_target', growth_ratio, setting_type='float')
            Settings.set_value('default_unit_size', unit_size / 100, setting_type='float')
            Settings.set_value('theme', theme)
            for name, enabled in (notifications or {}).items():
                if name in NOTIFICATION_KEYS:
                    Settings.set_value(NOTIFICATION_KEYS[name], bool(enabled), setting_type='boolean')

            if growth_changed:
                CapitalService.apply_growth_rate(growth_ratio, capital=capital)

        if growth_changed:
            current_app.logger.info(f'Growth target changed to {growth}%; capital schedule re-projected')
        return SettingsService.to_dict()
