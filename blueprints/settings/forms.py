from flask_wtf import FlaskForm
from wtforms import BooleanField, DecimalField, SelectField
from wtforms.validators import InputRequired, NumberRange

from services.settings_service import THEMES


class SettingsForm(FlaskForm):
    monthly_growth_target = DecimalField('Monthly Growth Target (%)', validators=[
        InputRequired(message='Growth target is required'),
        NumberRange(min=0.01, max=100, message='Growth target must be between 0 and 100%')
    ])
    default_unit_size = DecimalField('Default Unit Size (%)', validators=[
        InputRequired(message='Unit size is required'),
        NumberRange(min=0.01, max=100, message='Unit size must be between 0 and 100%')
    ])
    theme = SelectField('Theme', choices=[(theme, theme.title()) for theme in THEMES], default='system')
    streak_warnings = BooleanField('Streak warnings')
    monthly_goal_reminders = BooleanField('Monthly goal reminders')
    weekly_plan_reminders = BooleanField('Weekly plan reminders')

    def notifications(self):
        return {
            'streak_warnings': self.streak_warnings.data,
            'monthly_goal_reminders': self.monthly_goal_reminders.data,
            'weekly_plan_reminders': self.weekly_plan_reminders.data,
        }
