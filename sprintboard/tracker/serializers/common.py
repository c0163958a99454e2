# ============================================
# tracker/serializers/common.py
# ============================================
from django.contrib.auth import get_user_model
from rest_framework import serializers
from tracker.utils.duration import format_duration, parse_duration

User = get_user_model()


def meta_dict(registry, key) -> dict:
    """Display metadata for a stored value; unknown values come back flagged"""
    meta = registry.get(key)
    return {'label': meta.label, 'color': meta.color, 'known': meta.known}


class UserSummarySerializer(serializers.ModelSerializer):
    full_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'full_name', 'email']

    def get_full_name(self, obj):
        return obj.get_full_name() or obj.get_username()


class DurationField(serializers.Field):
    """
    Minutes in, minutes out. Input may be an integer number of minutes or a
    duration string such as ``"1h 30m"``, ``"2d"`` or ``"1.5h"``.
    """
    default_error_messages = {
        'invalid': "Enter a duration like '1h 30m', '2d' or a number of minutes.",
        'negative': "Duration cannot be negative.",
    }

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail('invalid')
        if isinstance(data, int):
            minutes = data
        elif isinstance(data, float) and data.is_integer():
            minutes = int(data)
        elif isinstance(data, str):
            minutes = parse_duration(data)
            if minutes is None:
                self.fail('invalid')
        else:
            self.fail('invalid')
        if minutes < 0:
            self.fail('negative')
        return minutes

    def to_representation(self, value):
        return int(value)


class DurationDisplayField(serializers.ReadOnlyField):
    """``"2h 15m"`` companion for a minutes field"""

    def to_representation(self, value):
        return format_duration(value)
