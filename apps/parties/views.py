from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view

from .serializers import (
    PartySerializer,
    PartyCreateSerializer,
    PartyUpdateSerializer,
    PartyItemSerializer,
    ParticipantSerializer,
    AddParticipantSerializer,
    ItemCreateSerializer,
    ItemUpdateSerializer,
)

from apps.parties.services import (
    create_party,
    list_parties_for_user,
    get_party_for_user,
    update_party,
    delete_party,
    add_participant,
    remove_participant,
    get_party_participants,
    add_item,
    update_item,
    delete_item,
    # Exceptions
    PartyNotFoundError,
    ItemNotFoundError,
    ParticipantNotFoundError,
    UserNotFoundError,
    AlreadyParticipantError,
    NotParticipantError,
    InsufficientPermissionsError,
    InvalidPartyDateError,
    InvalidQuantityError,
)


UUID_REGEX = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

ERROR_STATUS = {
    PartyNotFoundError: status.HTTP_404_NOT_FOUND,
    ItemNotFoundError: status.HTTP_404_NOT_FOUND,
    ParticipantNotFoundError: status.HTTP_404_NOT_FOUND,
    UserNotFoundError: status.HTTP_404_NOT_FOUND,
    NotParticipantError: status.HTTP_403_FORBIDDEN,
    InsufficientPermissionsError: status.HTTP_403_FORBIDDEN,
    AlreadyParticipantError: status.HTTP_409_CONFLICT,
    InvalidPartyDateError: status.HTTP_400_BAD_REQUEST,
    InvalidQuantityError: status.HTTP_400_BAD_REQUEST,
}

SERVICE_ERRORS = tuple(ERROR_STATUS)


def error_response(exc):
    """Map a parties service exception to its HTTP response."""
    return Response({'error': str(exc)}, status=ERROR_STATUS[type(exc)])


@extend_schema_view(
    list=extend_schema(responses={200: PartySerializer(many=True)}, tags=['parties']),
    create=extend_schema(request=PartyCreateSerializer, responses={201: PartySerializer}, tags=['parties']),
    retrieve=extend_schema(responses={200: PartySerializer}, tags=['parties']),
    update=extend_schema(request=PartyUpdateSerializer, responses={200: PartySerializer}, tags=['parties']),
    partial_update=extend_schema(request=PartyUpdateSerializer, responses={200: PartySerializer}, tags=['parties']),
    destroy=extend_schema(responses={204: None}, tags=['parties']),
)
class PartyViewSet(viewsets.ViewSet):
    """
    ViewSet for parties, their participants and their items.

    All membership and ownership rules live in the services.
    Views are thin HTTP handlers only.

    list: Parties the user created or participates in
    create: Create a party (creator joins automatically)
    retrieve: Get a party (creator or participant)
    update / partial_update: Update a party (creator only)
    destroy: Delete a party (creator only)
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_REGEX

    def list(self, request):
        """List parties visible to the user."""
        parties = list_parties_for_user(user=request.user)
        return Response(PartySerializer(parties, many=True).data)

    def create(self, request):
        """Create a new party."""
        serializer = PartyCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            party = create_party(creator=request.user, **serializer.validated_data)
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response(PartySerializer(party).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        """Get party details."""
        try:
            party = get_party_for_user(party_id=pk, user=request.user)
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response(PartySerializer(party).data)

    def update(self, request, pk=None):
        """Update a party; only the fields sent are changed."""
        serializer = PartyUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            party = update_party(party_id=pk, user=request.user, **serializer.validated_data)
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response(PartySerializer(party).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        """Delete a party."""
        try:
            delete_party(party_id=pk, user=request.user)
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    # -------------------------------------------------------------------------
    # Participants
    # -------------------------------------------------------------------------

    @extend_schema(responses={200: ParticipantSerializer(many=True)}, tags=['participants'])
    @action(detail=True, methods=['get'], url_path='participants', url_name='participants')
    def participants(self, request, pk=None):
        """List participants (creator or participant only)."""
        try:
            get_party_for_user(party_id=pk, user=request.user)
            memberships = get_party_participants(party_id=pk)
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response(ParticipantSerializer(memberships, many=True).data)

    @extend_schema(request=AddParticipantSerializer, responses={201: ParticipantSerializer}, tags=['participants'])
    @participants.mapping.post
    def create_participant(self, request, pk=None):
        """Add a user to the party."""
        serializer = AddParticipantSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = add_participant(
                party_id=pk,
                user_id=serializer.validated_data['user_id'],
                added_by=request.user
            )
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response({
            'message': 'Participant added successfully',
            'participant': ParticipantSerializer(membership).data,
        }, status=status.HTTP_201_CREATED)

    @extend_schema(responses={204: None}, tags=['participants'])
    @action(
        detail=True,
        methods=['delete'],
        url_path=f'participants/(?P<user_id>{UUID_REGEX})',
        url_name='participant-detail'
    )
    def destroy_participant(self, request, pk=None, user_id=None):
        """Remove a participant (themself, or anyone by the creator)."""
        try:
            remove_participant(party_id=pk, user_id=user_id, removed_by=request.user)
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    @extend_schema(request=ItemCreateSerializer, responses={201: PartyItemSerializer}, tags=['items'])
    @action(detail=True, methods=['post'], url_path='items', url_name='items')
    def items(self, request, pk=None):
        """Add an item (participants only)."""
        serializer = ItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = add_item(party_id=pk, user=request.user, **serializer.validated_data)
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response(PartyItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ItemUpdateSerializer, responses={200: PartyItemSerializer}, tags=['items'])
    @action(
        detail=True,
        methods=['put', 'patch'],
        url_path=f'items/(?P<item_id>{UUID_REGEX})',
        url_name='item-detail'
    )
    def item_detail(self, request, pk=None, item_id=None):
        """Update an item (bringer only)."""
        serializer = ItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = update_item(
                party_id=pk,
                item_id=item_id,
                user=request.user,
                **serializer.validated_data
            )
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response(PartyItemSerializer(item).data)

    @extend_schema(responses={204: None}, tags=['items'])
    @item_detail.mapping.delete
    def destroy_item(self, request, pk=None, item_id=None):
        """Delete an item (bringer only)."""
        try:
            delete_item(party_id=pk, item_id=item_id, user=request.user)
        except SERVICE_ERRORS as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)
