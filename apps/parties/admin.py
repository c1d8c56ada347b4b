# ==========================================
# apps/parties/admin.py
# ==========================================

from django.contrib import admin
from apps.parties.models import Party, PartyParticipant, PartyItem


class PartyParticipantInline(admin.TabularInline):
    """Inline admin for party participants."""
    model = PartyParticipant
    extra = 0
    fields = ['user', 'created_at']
    readonly_fields = ['created_at']


class PartyItemInline(admin.TabularInline):
    """Inline admin for party items."""
    model = PartyItem
    extra = 0
    fields = ['name', 'quantity', 'category', 'user', 'description']


@admin.register(Party)
class PartyAdmin(admin.ModelAdmin):
    """Admin interface for Parties."""

    list_display = [
        'name',
        'date',
        'location',
        'creator',
        'participant_count',
        'created_at'
    ]
    list_filter = ['date', 'created_at']
    search_fields = ['name', 'location', 'description', 'creator__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [PartyParticipantInline, PartyItemInline]
    date_hierarchy = 'date'
    ordering = ['-date']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'date', 'location', 'description', 'creator')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def participant_count(self, obj):
        """Show number of participants."""
        return obj.participations.count()
    participant_count.short_description = 'Participants'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('creator')


@admin.register(PartyItem)
class PartyItemAdmin(admin.ModelAdmin):
    """Admin interface for Party Items."""

    list_display = ['name', 'quantity', 'category', 'party', 'user', 'created_at']
    list_filter = ['category', 'created_at']
    search_fields = ['name', 'party__name', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('party', 'user')
