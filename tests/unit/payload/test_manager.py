"""Tests for payload selection and release."""

from unittest.mock import MagicMock

import pytest

from rakshak.exceptions import LinkStateError, PayloadNotSelectedError
from rakshak.link.lifecycle import ConnectionStatus
from rakshak.payload.manager import PayloadManager, PayloadType


def _lifecycle(connected):
    lifecycle = MagicMock()
    lifecycle.is_connected = connected
    lifecycle.status = ConnectionStatus.CONNECTED if connected else ConnectionStatus.DISCONNECTED
    return lifecycle


class TestPayloadType:
    def test_label_replaces_underscores(self):
        assert PayloadType.BLOOD_UNIT.label == "BLOOD UNIT"
        assert PayloadType.SALINE.label == "SALINE"


class TestPayloadManager:
    def test_init_documents_lifecycle_argument(self):
        assert "lifecycle:" in PayloadManager.__init__.__doc__

    def test_starts_with_none(self):
        manager = PayloadManager(_lifecycle(connected=True))
        assert manager.selected == PayloadType.NONE

    def test_select_while_connected(self):
        manager = PayloadManager(_lifecycle(connected=True))
        manager.select(PayloadType.MEDICINE_KIT)
        assert manager.selected == PayloadType.MEDICINE_KIT

    def test_select_requires_link(self):
        manager = PayloadManager(_lifecycle(connected=False))
        with pytest.raises(LinkStateError) as exc_info:
            manager.select(PayloadType.SALINE)
        assert exc_info.value.context["current_status"] == "DISCONNECTED"

    def test_release_returns_payload_and_resets(self):
        manager = PayloadManager(_lifecycle(connected=True))
        manager.select(PayloadType.BLOOD_UNIT)
        assert manager.release() == PayloadType.BLOOD_UNIT
        assert manager.selected == PayloadType.NONE

    def test_release_without_selection_raises(self):
        manager = PayloadManager(_lifecycle(connected=True))
        with pytest.raises(PayloadNotSelectedError):
            manager.release()

    def test_release_requires_link(self):
        lifecycle = _lifecycle(connected=True)
        manager = PayloadManager(lifecycle)
        manager.select(PayloadType.SALINE)
        lifecycle.is_connected = False
        lifecycle.status = ConnectionStatus.DISCONNECTED
        with pytest.raises(LinkStateError):
            manager.release()
        assert manager.selected == PayloadType.SALINE

    def test_release_logs_warning(self, caplog):
        manager = PayloadManager(_lifecycle(connected=True))
        manager.select(PayloadType.SALINE)
        with caplog.at_level("WARNING", logger="rakshak.payload.manager"):
            manager.release()
        assert "DROPPING PAYLOAD: SALINE" in caplog.text
