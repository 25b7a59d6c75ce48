from extensions import db
from datetime import datetime


def _parse_bool(raw):
    return raw.lower() in ('true', '1', 'yes')


# setting_type -> parser for the stored string
VALUE_PARSERS = {
    'float': float,
    'boolean': _parse_bool,
    'string': str,
}


class Settings(db.Model):
    """User preference stored as a string with a type tag.

    Keys used: monthly_growth_target and default_unit_size (ratios), theme,
    and the notifications.* toggles.
    """
    __tablename__ = 'settings'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(100), nullable=False, unique=True)
    value = db.Column(db.String(500))
    description = db.Column(db.String(255))
    setting_type = db.Column(db.String(50))  # 'float', 'boolean' or 'string'
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def typed_value(self):
        parse = VALUE_PARSERS.get(self.setting_type or 'string', str)
        return parse(self.value)

    @staticmethod
    def get_value(key, default=None):
        """Parsed value for ``key`` or ``default`` when no row exists."""
        setting = Settings.query.filter_by(key=key).first()
        return setting.typed_value if setting else default

    @staticmethod
    def set_value(key, value, description=None, setting_type='string'):
        """Insert or update ``key``; the caller commits."""
        if setting_type not in VALUE_PARSERS:
            raise ValueError(f'Unsupported setting type: {setting_type}')

        setting = Settings.query.filter_by(key=key).first()
        if setting is None:
            setting = Settings(key=key, description=description, setting_type=setting_type)
            db.session.add(setting)
        setting.value = str(value)
        return setting

    def __repr__(self):
        return f'<Settings {self.key}={self.value}>'
