import pytest
from unittest.mock import patch
from django.db import transaction
from apps.notifications.dispatcher import (
    get_recipient_tokens,
    dispatch,
    notify_party_participants,
)


@pytest.mark.django_db
class TestRecipients:
    """Tests for get_recipient_tokens()"""

    def test_excludes_actor_and_users_without_token(self, party, host):
        """Only other participants with a device are recipients."""
        tokens = get_recipient_tokens(party_id=party.id, actor_id=host.id)

        assert tokens == ['token-friend']

    def test_non_participants_never_notified(self, party, host, friend):
        """Users who left the party are not recipients."""
        party.participations.filter(user=friend).delete()

        assert get_recipient_tokens(party_id=party.id, actor_id=host.id) == []


@pytest.mark.django_db
class TestDispatch:
    """Tests for dispatch()"""

    def test_sends_to_recipients(self, party, friend):
        with patch('apps.notifications.push.send_push_notification') as mock_send:
            dispatch(party_id=party.id, actor_id=friend.id, title="Hello", body="World")

        mock_send.assert_called_once_with(['token-host'], "Hello", "World")

    def test_skips_when_no_recipients(self, party, host, friend):
        """Nothing is sent when every other participant lacks a token."""
        friend.push_token = ''
        friend.save(update_fields=['push_token'])

        with patch('apps.notifications.push.send_push_notification') as mock_send:
            dispatch(party_id=party.id, actor_id=host.id, title="Hello", body="World")

        mock_send.assert_not_called()

    def test_delivery_failure_is_logged_not_raised(self, party, host):
        with patch(
            'apps.notifications.push.send_push_notification',
            side_effect=ConnectionError("gateway down")
        ), patch('apps.notifications.dispatcher.logger') as mock_logger:
            dispatch(party_id=party.id, actor_id=host.id, title="Hello", body="World")

        mock_logger.exception.assert_called_once()


@pytest.mark.django_db
class TestNotifyOnCommit:
    """Tests for notify_party_participants()"""

    def test_sent_after_commit(self, party, host, django_capture_on_commit_callbacks):
        with patch('apps.notifications.push.send_push_notification') as mock_send:
            with django_capture_on_commit_callbacks(execute=True) as callbacks:
                notify_party_participants(
                    party_id=party.id,
                    actor_id=host.id,
                    title="Party updated",
                    body="Changed"
                )

                mock_send.assert_not_called()

        assert len(callbacks) == 1
        mock_send.assert_called_once_with(['token-friend'], "Party updated", "Changed")

    def test_discarded_on_rollback(self, party, host, django_capture_on_commit_callbacks):
        """A rolled back mutation sends nothing."""
        with django_capture_on_commit_callbacks() as callbacks:
            with pytest.raises(RuntimeError):
                with transaction.atomic():
                    notify_party_participants(
                        party_id=party.id,
                        actor_id=host.id,
                        title="Party updated",
                        body="Changed"
                    )
                    raise RuntimeError("abort")

        assert callbacks == []

    def test_recipients_resolved_at_commit(self, party, host, friend, django_capture_on_commit_callbacks):
        """A participant removed in the same transaction is not notified."""
        with patch('apps.notifications.push.send_push_notification') as mock_send:
            with django_capture_on_commit_callbacks(execute=True):
                notify_party_participants(
                    party_id=party.id,
                    actor_id=host.id,
                    title="Party updated",
                    body="Changed"
                )
                party.participations.filter(user=friend).delete()

        mock_send.assert_not_called()
