import pytest

from app.modules.chat.naming import build_buddy_room_name
from app.modules.chat.service import ChatRoomService
from tests.conftest import WEEK

PAIRINGS = "accountability_buddies"
ROOMS = "chat_rooms"


def _pairing(pairing_id, a, b, c=None, week="2024-06-03", group_id="g1"):
    return {
        "id": pairing_id, "group_id": group_id, "user_id_1": a, "user_id_2": b,
        "user_id_3": c, "week_start": week,
    }


def _profile(user_id, first, last=None):
    return {"id": user_id, "first_name": first, "last_name": last, "avatar_url": None}


class TestRoomName:
    def test_joined_short_names(self):
        assert build_buddy_room_name(["Ann B.", "Carl D."]) == "You, Ann B. & Carl D."

    def test_long_names_fall_back_to_count(self):
        names = ["Bartholomew K.", "Maximiliana T."]
        assert len("You, " + " & ".join(names)) > 35
        assert build_buddy_room_name(names) == "You & 2 accountability buddies"

    def test_single_long_name(self):
        assert build_buddy_room_name(["Constantinopolitana Wolfeschlegel S."]) == "You & 1 accountability buddy"

    def test_no_names_fall_back_to_generic_label(self):
        assert build_buddy_room_name([]) == "Accountability Buddies"
        assert build_buddy_room_name([None, ""]) == "Accountability Buddies"

    def test_threshold_is_configurable(self):
        assert build_buddy_room_name(["Ann B."], max_length=5) == "You & 1 accountability buddy"
        assert build_buddy_room_name(["Ann B."], max_length=11) == "You, Ann B."


class TestGetBuddyChatRoom:
    def test_creates_room_once_per_pairing(self, fake_supabase):
        client = fake_supabase()
        service = ChatRoomService(client)

        first = service.get_buddy_chat_room(["A", "B"], "p1")
        second = service.get_buddy_chat_room(["A", "B"], "p1")

        assert first is not None
        assert first == second
        rooms = [r for r in client.rows(ROOMS) if r["accountability_pairing_id"] == "p1"]
        assert len(rooms) == 1
        assert rooms[0]["is_buddy_chat"] is True
        assert rooms[0]["is_group_chat"] is True
        assert rooms[0]["name"] == "Accountability Buddies"

    def test_returns_existing_room(self, fake_supabase):
        client = fake_supabase({ROOMS: [
            {"id": "r-plain", "is_buddy_chat": False, "accountability_pairing_id": "p1"},
            {"id": "r1", "is_buddy_chat": True, "accountability_pairing_id": "p1"},
        ]})
        assert ChatRoomService(client).get_buddy_chat_room(["A", "B"], "p1") == "r1"
        assert client.count_calls(ROOMS, "insert") == 0

    def test_sets_group_when_known(self, fake_supabase):
        client = fake_supabase()
        ChatRoomService(client).get_buddy_chat_room(["A", "B"], "p1", group_id="g1")
        assert client.rows(ROOMS)[0]["group_id"] == "g1"

    @pytest.mark.parametrize("members,pairing_id", [(["A"], "p1"), ([], "p1"), (["A", "B"], "")])
    def test_invalid_input_fails_fast(self, fake_supabase, members, pairing_id):
        client = fake_supabase()
        assert ChatRoomService(client).get_buddy_chat_room(members, pairing_id) is None
        assert client.calls == []

    @pytest.mark.parametrize("op", ["select", "insert"])
    def test_data_errors_return_none(self, fake_supabase, op):
        client = fake_supabase()
        client.fail_on(ROOMS, op)
        assert ChatRoomService(client).get_buddy_chat_room(["A", "B"], "p1") is None


class TestGetBuddyRoomName:
    def test_formats_first_name_and_last_initial(self, fake_supabase):
        client = fake_supabase({"client_profiles": [
            _profile("B", "Ben", "stone"), _profile("C", "Cara", "Diaz"),
        ]})
        assert ChatRoomService(client).get_buddy_room_name(["B", "C"]) == "You, Ben S. & Cara D."

    def test_missing_profiles_use_generic_label(self, fake_supabase):
        client = fake_supabase({"client_profiles": []})
        assert ChatRoomService(client).get_buddy_room_name(["B"]) == "Accountability Buddies"

    def test_profile_error_uses_generic_label(self, fake_supabase):
        client = fake_supabase()
        client.fail_on("client_profiles", "select")
        assert ChatRoomService(client).get_buddy_room_name(["B"]) == "Accountability Buddies"


class TestFetchBuddyChatRooms:
    def test_current_week_pairing(self, fake_supabase):
        client = fake_supabase({
            PAIRINGS: [
                _pairing("p1", "A", "B", "C"),
                _pairing("p2", "D", "E"),
                _pairing("p0", "A", "D", week="2024-05-27"),
            ],
            "client_profiles": [_profile("B", "Ben", "Stone"), _profile("C", "Cara", "Diaz")],
        })
        rooms = ChatRoomService(client).fetch_buddy_chat_rooms("A", WEEK)

        assert len(rooms) == 1
        room = rooms[0]
        assert room.accountability_pairing_id == "p1"
        assert room.buddy_ids == ["B", "C"]
        assert room.name == "You, Ben S. & Cara D."
        assert room.is_buddy_chat and room.is_group_chat
        assert room.group_id == "g1"

    def test_repeated_fetch_reuses_room(self, fake_supabase):
        client = fake_supabase({PAIRINGS: [_pairing("p1", "A", "B")]})
        service = ChatRoomService(client)
        first = service.fetch_buddy_chat_rooms("A", WEEK)
        second = service.fetch_buddy_chat_rooms("B", WEEK)
        assert first[0].id == second[0].id
        assert len(client.rows(ROOMS)) == 1

    def test_falls_back_to_most_recent_pairing(self, fake_supabase):
        client = fake_supabase({PAIRINGS: [
            _pairing("older", "A", "B", week="2024-05-20"),
            _pairing("latest", "A", "C", week="2024-05-27"),
            _pairing("someone-else", "D", "E"),
        ]})
        rooms = ChatRoomService(client).fetch_buddy_chat_rooms("A", WEEK)
        assert [r.accountability_pairing_id for r in rooms] == ["latest"]
        assert rooms[0].buddy_ids == ["C"]

    def test_user_without_pairings(self, fake_supabase):
        client = fake_supabase({PAIRINGS: [_pairing("p1", "A", "B")]})
        assert ChatRoomService(client).fetch_buddy_chat_rooms("Z", WEEK) == []

    def test_pairing_query_error_returns_empty_list(self, fake_supabase):
        client = fake_supabase()
        client.fail_on(PAIRINGS, "select")
        assert ChatRoomService(client).fetch_buddy_chat_rooms("A", WEEK) == []

    def test_failing_pairing_is_skipped(self, fake_supabase, monkeypatch):
        client = fake_supabase({PAIRINGS: [
            _pairing("p1", "A", "B", group_id="g1"),
            _pairing("p2", "A", "C", group_id="g2"),
        ]})
        service = ChatRoomService(client)
        original = service.get_buddy_chat_room

        def flaky(member_ids, pairing_id, group_id=None):
            if pairing_id == "p1":
                raise RuntimeError("boom")
            return original(member_ids, pairing_id, group_id=group_id)

        monkeypatch.setattr(service, "get_buddy_chat_room", flaky)
        rooms = service.fetch_buddy_chat_rooms("A", WEEK)
        assert [r.accountability_pairing_id for r in rooms] == ["p2"]

    def test_room_creation_failure_skips_pairing(self, fake_supabase):
        client = fake_supabase({PAIRINGS: [_pairing("p1", "A", "B")]})
        client.fail_on(ROOMS, "insert")
        assert ChatRoomService(client).fetch_buddy_chat_rooms("A", WEEK) == []


class TestGetPairing:
    def test_loads_existing_pairing(self, fake_supabase):
        client = fake_supabase({PAIRINGS: [_pairing("p1", "A", "B", "C")]})
        pairing = ChatRoomService(client).get_pairing("p1")
        assert pairing.member_ids == ["A", "B", "C"]
        assert pairing.group_id == "g1"

    def test_missing_pairing(self, fake_supabase):
        assert ChatRoomService(fake_supabase()).get_pairing("nope") is None
