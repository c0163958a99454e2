# ============================================
# tracker/serializers/workflow.py
# ============================================
from rest_framework import serializers
from tracker.constants import STATUSES


class TransitionSerializer(serializers.Serializer):
    from_status = serializers.ChoiceField(choices=STATUSES.keys())
    to_status = serializers.ChoiceField(choices=STATUSES.keys())

    def validate(self, attrs):
        if attrs['from_status'] == attrs['to_status']:
            raise serializers.ValidationError("A status cannot transition to itself")
        return attrs


class WorkflowUpdateSerializer(serializers.Serializer):
    """Either sparse ``transitions`` or the dense editor ``grid``; ``reset`` drops the workflow"""
    name = serializers.CharField(max_length=100, required=False)
    transitions = TransitionSerializer(many=True, required=False)
    grid = serializers.DictField(
        child=serializers.DictField(child=serializers.BooleanField()), required=False
    )
    reset = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        given = [k for k in ('transitions', 'grid') if k in attrs]
        if attrs.get('reset'):
            if given:
                raise serializers.ValidationError("Reset cannot be combined with transitions or grid")
            return attrs
        if len(given) != 1:
            raise serializers.ValidationError("Provide exactly one of 'transitions' or 'grid'")
        grid = attrs.get('grid') or {}
        unknown = [s for s in grid if s not in STATUSES] + [
            s for row in grid.values() for s in row if s not in STATUSES
        ]
        if unknown:
            raise serializers.ValidationError({'grid': [f"Unknown status '{s}'" for s in sorted(set(unknown))]})
        return attrs


def matrix_payload(matrix, name=None) -> dict:
    return {
        'name': name,
        'configured': matrix.configured,
        'statuses': matrix.statuses,
        'transitions': [{'from_status': a, 'to_status': b} for a, b in matrix.to_pairs()],
        'grid': matrix.to_grid(),
    }
