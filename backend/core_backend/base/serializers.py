from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Base serializer that provides common functionality.

    Features:
    - Optimization field declaration (read by OptimizedQuerysetMixin)
    - Read-only timestamps when the model has them
    """

    class Meta:
        # Default optimization fields (can be overridden)
        select_related_fields = []
        prefetch_related_fields = []

    def get_fields(self):
        fields = super().get_fields()
        for name in ("created_at", "updated_at"):
            if name in fields:
                fields[name].read_only = True
        return fields
