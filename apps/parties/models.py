# ==========================================
# apps/parties/models.py
# ==========================================

from django.db import models
import uuid


class ItemCategory(models.TextChoices):
    DRINKS = 'Boissons', 'Drinks'
    FOOD = 'Nourriture', 'Food'
    DESSERTS = 'Desserts', 'Desserts'
    SNACKS = 'Snacks', 'Snacks'
    DECORATIONS = 'Décorations', 'Decorations'
    UTENSILS = 'Ustensiles', 'Utensils'
    OTHER = 'Autres', 'Other'


ITEM_DESCRIPTION_MAX_LENGTH = 500


class Party(models.Model):
    """An event with one creator and a set of participants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    date = models.DateTimeField()
    location = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    creator = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='created_parties')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'parties'
        indexes = [
            models.Index(fields=['date'], name='idx_parties_date'),
            models.Index(fields=['creator'], name='idx_parties_creator_id'),
        ]
        ordering = ['date']

    def __str__(self):
        return self.name

    def is_creator(self, user):
        return self.creator_id == user.id

    def has_participant(self, user):
        # Uses prefetched participations when present
        return any(p.user_id == user.id for p in self.participations.all())

    def can_view(self, user):
        return self.is_creator(user) or self.has_participant(user)


class PartyParticipant(models.Model):
    """Membership edge between a party and a user."""

    party = models.ForeignKey(Party, on_delete=models.CASCADE, related_name='participations')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='participations')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'party_participants'
        constraints = [
            models.UniqueConstraint(fields=['party', 'user'], name='unique_party_participant'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user.name} in {self.party.name}"


class PartyItem(models.Model):
    """Something a participant commits to bring to a party."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    party = models.ForeignKey(Party, on_delete=models.CASCADE, related_name='items')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='party_items')
    name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField()
    category = models.CharField(max_length=50, choices=ItemCategory.choices, blank=True, null=True)
    description = models.CharField(max_length=ITEM_DESCRIPTION_MAX_LENGTH, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'party_items'
        indexes = [
            models.Index(fields=['party'], name='idx_party_items_party_id'),
            models.Index(fields=['user'], name='idx_party_items_user_id'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='positive_quantity',
            ),
            models.CheckConstraint(
                condition=models.Q(category__isnull=True) | models.Q(category__in=ItemCategory.values),
                name='valid_category',
            ),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity} x {self.name} ({self.party.name})"

    def is_bringer(self, user):
        return self.user_id == user.id
