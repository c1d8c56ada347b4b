from django.utils import timezone
from rest_framework import serializers
from .models import Party, PartyItem, PartyParticipant, ItemCategory, ITEM_DESCRIPTION_MAX_LENGTH
from apps.accounts.serializers import UserPublicSerializer


def validate_future_date(value):
    if value <= timezone.now():
        raise serializers.ValidationError('Party date must be in the future')
    return value


class PartyItemSerializer(serializers.ModelSerializer):
    """Item with the name of the participant bringing it."""

    user_id = serializers.UUIDField(read_only=True)
    brought_by = serializers.CharField(source='user.name', read_only=True)

    class Meta:
        model = PartyItem
        fields = [
            'id',
            'name',
            'quantity',
            'category',
            'description',
            'user_id',
            'brought_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ParticipantSerializer(serializers.ModelSerializer):
    """Membership rendered as the participating user."""

    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = PartyParticipant
        fields = ['user', 'created_at']
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {**data.pop('user'), 'joined_at': data['created_at']}


class PartySerializer(serializers.ModelSerializer):
    """Main serializer for parties, with items and participants."""

    creator_id = serializers.UUIDField(read_only=True)
    creator_name = serializers.CharField(source='creator.name', read_only=True)
    items = PartyItemSerializer(many=True, read_only=True)
    participants = ParticipantSerializer(source='participations', many=True, read_only=True)

    class Meta:
        model = Party
        fields = [
            'id',
            'name',
            'date',
            'location',
            'description',
            'creator_id',
            'creator_name',
            'items',
            'participants',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PartyCreateSerializer(serializers.Serializer):
    """Serializer for creating parties."""

    name = serializers.CharField(max_length=255)
    date = serializers.DateTimeField(validators=[validate_future_date])
    location = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')


class PartyUpdateSerializer(serializers.Serializer):
    """Serializer for updating parties; every field is optional."""

    name = serializers.CharField(required=False, max_length=255)
    date = serializers.DateTimeField(required=False, validators=[validate_future_date])
    location = serializers.CharField(required=False, max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)


class AddParticipantSerializer(serializers.Serializer):
    """Serializer for adding a participant to a party."""

    user_id = serializers.UUIDField(required=True)


class ItemCreateSerializer(serializers.Serializer):
    """Serializer for adding an item to a party."""

    name = serializers.CharField(max_length=255)
    quantity = serializers.IntegerField(min_value=1)
    category = serializers.ChoiceField(
        choices=ItemCategory.choices,
        required=False,
        allow_null=True
    )
    description = serializers.CharField(
        required=False,
        allow_blank=True,
        default='',
        max_length=ITEM_DESCRIPTION_MAX_LENGTH
    )


class ItemUpdateSerializer(serializers.Serializer):
    """Serializer for updating an item; every field is optional."""

    name = serializers.CharField(required=False, max_length=255)
    quantity = serializers.IntegerField(required=False, min_value=1)
    category = serializers.ChoiceField(
        choices=ItemCategory.choices,
        required=False,
        allow_null=True
    )
    description = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=ITEM_DESCRIPTION_MAX_LENGTH
    )

    def validate_category(self, value):
        # Explicit null clears the category; the service takes '' for that
        return '' if value is None else value
