"""VaultRegistry against the in-memory store: ordering, invariants, atomicity."""

import pytest

from vault.errors import RegistryError
from vault.records import VaultRecord

from conftest import FINGERPRINT, START_HEIGHT


def _update_fields(**overrides):
    fields = {
        "title": "Doc A v2",
        "fingerprint": "b" * 64,
        "summary": "revised",
        "labels": ["x", "y"],
    }
    fields.update(overrides)
    return fields


def _store_unallocated(store, vault_id):
    """Put a record owned by alice under an id the sequence never handed out."""
    store.put_record(VaultRecord(
        vault_id=vault_id,
        title="stray",
        originator="alice",
        fingerprint=FINGERPRINT,
        summary="s",
        classification="c",
        labels=("l",),
    ))


class TestRegister:

    def test_ids_are_sequential_from_one(self, registry, store, valid_fields):
        for expected in (1, 2, 3):
            previous = store.last_vault_id()
            outcome = registry.register(**valid_fields)
            assert outcome.ok
            assert outcome.value == previous + 1 == expected
            assert store.last_vault_id() == expected

    def test_record_fields(self, registry, clock, valid_fields):
        clock.set(START_HEIGHT + 7)
        vault_id = registry.register(**valid_fields).value
        record = registry.get_vault(vault_id)
        assert record == VaultRecord(
            vault_id=1,
            title="Doc A",
            originator="alice",
            fingerprint=FINGERPRINT,
            summary="summary",
            classification="public",
            labels=("x",),
            created_at=START_HEIGHT + 7,
            modified_at=START_HEIGHT + 7,
        )

    @pytest.mark.parametrize("field,value,error", [
        ("title", "", RegistryError.MALFORMED_INPUT),
        ("title", "t" * 51, RegistryError.MALFORMED_INPUT),
        ("fingerprint", "f" * 63, RegistryError.MALFORMED_INPUT),
        ("fingerprint", "f" * 65, RegistryError.MALFORMED_INPUT),
        ("summary", "", RegistryError.CONTENT_VALIDATION_FAILURE),
        ("summary", "s" * 201, RegistryError.CONTENT_VALIDATION_FAILURE),
        ("classification", "", RegistryError.CATEGORY_VALIDATION_FAILURE),
        ("classification", "c" * 21, RegistryError.CATEGORY_VALIDATION_FAILURE),
        ("labels", [], RegistryError.CONTENT_VALIDATION_FAILURE),
        ("labels", ["l"] * 6, RegistryError.CONTENT_VALIDATION_FAILURE),
        ("labels", ["ok", ""], RegistryError.CONTENT_VALIDATION_FAILURE),
        ("labels", ["x" * 31], RegistryError.CONTENT_VALIDATION_FAILURE),
    ])
    def test_rejections(self, registry, store, valid_fields, field, value, error):
        valid_fields[field] = value
        outcome = registry.register(**valid_fields)
        assert not outcome.ok
        assert outcome.error is error
        assert store.last_vault_id() == 0
        assert registry.get_vault(1) is None

    def test_label_collection_sizes_one_and_five_accepted(self, registry, valid_fields):
        valid_fields["labels"] = ["a"]
        assert registry.register(**valid_fields).ok
        valid_fields["labels"] = ["a", "b", "c", "d", "e"]
        assert registry.register(**valid_fields).ok

    def test_first_failure_wins(self, registry, valid_fields):
        # title is checked before fingerprint, summary before classification
        valid_fields.update(title="", fingerprint="short")
        assert registry.register(**valid_fields).error is RegistryError.MALFORMED_INPUT

        valid_fields.update(title="ok", fingerprint=FINGERPRINT, summary="", classification="")
        assert registry.register(**valid_fields).error is RegistryError.CONTENT_VALIDATION_FAILURE

        valid_fields.update(summary="ok", labels=[])
        assert registry.register(**valid_fields).error is RegistryError.CATEGORY_VALIDATION_FAILURE

    def test_failed_register_does_not_consume_an_id(self, registry, valid_fields):
        assert registry.register(**valid_fields).value == 1
        assert not registry.register(**dict(valid_fields, title="")).ok
        assert registry.register(**valid_fields).value == 2

    def test_labels_are_copied(self, registry, valid_fields):
        labels = ["x"]
        vault_id = registry.register(**dict(valid_fields, labels=labels)).value
        labels.append("mutated")
        assert registry.get_vault(vault_id).labels == ("x",)

    def test_readers_cannot_alter_stored_labels(self, registry, valid_fields):
        vault_id = registry.register(**valid_fields).value
        record = registry.get_vault(vault_id)
        with pytest.raises(AttributeError):
            record.labels.extend(["a"] * 10)
        assert registry.get_vault(vault_id).labels == ("x",)


class TestUpdate:

    def test_owner_can_update(self, registry, clock, valid_fields):
        vault_id = registry.register(**valid_fields).value
        clock.advance(5)
        outcome = registry.update(vault_id, **_update_fields())
        assert outcome.ok and outcome.value is True

        record = registry.get_vault(vault_id)
        assert record.title == "Doc A v2"
        assert record.fingerprint == "b" * 64
        assert record.summary == "revised"
        assert record.labels == ("x", "y")
        assert record.modified_at == START_HEIGHT + 5

    def test_originator_and_creation_preserved(self, registry, clock, valid_fields):
        vault_id = registry.register(**valid_fields).value
        for i in range(3):
            clock.advance(1)
            assert registry.update(vault_id, **_update_fields(title=f"rev {i}")).ok

        record = registry.get_vault(vault_id)
        assert record.originator == "alice"
        assert record.created_at == START_HEIGHT
        assert record.classification == "public"
        assert record.modified_at == START_HEIGHT + 3

    def test_other_caller_is_unauthorized(self, registry, host, valid_fields):
        vault_id = registry.register(**valid_fields).value
        host.identity = "mallory"
        outcome = registry.update(vault_id, **_update_fields())
        assert outcome.error is RegistryError.UNAUTHORIZED
        assert registry.get_vault(vault_id).title == "Doc A"

    def test_unauthorized_precedes_field_checks(self, registry, host, valid_fields):
        vault_id = registry.register(**valid_fields).value
        host.identity = "mallory"
        outcome = registry.update(vault_id, **_update_fields(title="", fingerprint="x"))
        assert outcome.error is RegistryError.UNAUTHORIZED

    @pytest.mark.parametrize("vault_id", [0, -1, 99])
    def test_unknown_vault(self, registry, valid_fields, vault_id):
        registry.register(**valid_fields)
        assert registry.update(vault_id, **_update_fields()).error is RegistryError.NOT_FOUND

    @pytest.mark.parametrize("field,value,error", [
        ("title", "", RegistryError.MALFORMED_INPUT),
        ("fingerprint", "f" * 63, RegistryError.MALFORMED_INPUT),
        ("fingerprint", "f" * 65, RegistryError.MALFORMED_INPUT),
        ("summary", "", RegistryError.CONTENT_VALIDATION_FAILURE),
        ("labels", ["l"] * 6, RegistryError.CONTENT_VALIDATION_FAILURE),
    ])
    def test_field_rejections_leave_record_untouched(self, registry, clock, valid_fields, field, value, error):
        vault_id = registry.register(**valid_fields).value
        before = registry.get_vault(vault_id)
        clock.advance(1)
        outcome = registry.update(vault_id, **_update_fields(**{field: value}))
        assert outcome.error is error
        assert registry.get_vault(vault_id) == before

    def test_record_outside_allocated_range_is_not_found(self, registry, store, valid_fields):
        _store_unallocated(store, 50)
        assert registry.update(50, **_update_fields()).error is RegistryError.NOT_FOUND

    def test_labels_checked_before_range(self, registry, store):
        _store_unallocated(store, 50)
        outcome = registry.update(50, **_update_fields(labels=[]))
        assert outcome.error is RegistryError.CONTENT_VALIDATION_FAILURE


class TestDelegate:

    @pytest.fixture
    def vault_id(self, registry, valid_fields):
        return registry.register(**valid_fields).value

    def test_grant_written(self, registry, vault_id):
        outcome = registry.delegate(vault_id, "bob", "contributor", 100, True)
        assert outcome.ok and outcome.value is True

        grant = registry.get_grant(vault_id, "bob")
        assert grant.tier == "contributor"
        assert grant.granted_at == START_HEIGHT
        assert grant.expires_at == START_HEIGHT + 100
        assert grant.can_modify is True

    def test_maximum_duration(self, registry, vault_id):
        assert registry.delegate(vault_id, "bob", "observer", 52560, False).ok
        assert registry.get_grant(vault_id, "bob").expires_at == START_HEIGHT + 52560

    @pytest.mark.parametrize("duration", [0, 52561, -5])
    def test_duration_out_of_bounds(self, registry, vault_id, duration):
        outcome = registry.delegate(vault_id, "bob", "observer", duration, False)
        assert outcome.error is RegistryError.TEMPORAL_BOUNDARY_VIOLATION
        assert registry.get_grant(vault_id, "bob") is None

    def test_self_grant_is_malformed(self, registry, vault_id):
        outcome = registry.delegate(vault_id, "alice", "observer", 10, False)
        assert outcome.error is RegistryError.MALFORMED_INPUT

    @pytest.mark.parametrize("tier", ["write", "ADMINISTRATOR", ""])
    def test_unknown_tier(self, registry, vault_id, tier):
        outcome = registry.delegate(vault_id, "bob", tier, 10, False)
        assert outcome.error is RegistryError.AUTHORIZATION_LEVEL_MISMATCH

    def test_non_owner_cannot_delegate(self, registry, host, vault_id):
        registry.delegate(vault_id, "bob", "administrator", 10, True)
        host.identity = "bob"
        outcome = registry.delegate(vault_id, "carol", "observer", 10, False)
        assert outcome.error is RegistryError.UNAUTHORIZED

    def test_unknown_vault(self, registry):
        outcome = registry.delegate(7, "bob", "observer", 10, False)
        assert outcome.error is RegistryError.NOT_FOUND

    def test_record_outside_allocated_range_is_not_found(self, registry, store):
        _store_unallocated(store, 50)
        outcome = registry.delegate(50, "bob", "observer", 10, False)
        assert outcome.error is RegistryError.NOT_FOUND
        assert registry.get_grant(50, "bob") is None

    def test_duration_checked_before_range(self, registry, store):
        _store_unallocated(store, 50)
        outcome = registry.delegate(50, "bob", "observer", 0, False)
        assert outcome.error is RegistryError.TEMPORAL_BOUNDARY_VIOLATION

    def test_non_bool_modify_flag(self, registry, vault_id):
        outcome = registry.delegate(vault_id, "bob", "observer", 10, 1)
        assert outcome.error is RegistryError.MALFORMED_INPUT

    def test_check_order(self, registry, vault_id):
        # self-target before tier, tier before duration
        assert registry.delegate(vault_id, "alice", "bogus", 0, False).error is RegistryError.MALFORMED_INPUT
        assert registry.delegate(vault_id, "bob", "bogus", 0, False).error is RegistryError.AUTHORIZATION_LEVEL_MISMATCH
        assert registry.delegate(vault_id, "bob", "observer", 0, "x").error is RegistryError.TEMPORAL_BOUNDARY_VIOLATION

    def test_later_grant_overwrites(self, registry, clock, vault_id):
        registry.delegate(vault_id, "bob", "administrator", 500, True)
        clock.advance(10)
        registry.delegate(vault_id, "bob", "observer", 20, False)

        grant = registry.get_grant(vault_id, "bob")
        assert grant.tier == "observer"
        assert grant.granted_at == START_HEIGHT + 10
        assert grant.expires_at == START_HEIGHT + 30
        assert grant.can_modify is False

    def test_regrant_after_expiry(self, registry, clock, vault_id):
        registry.delegate(vault_id, "bob", "observer", 5, False)
        clock.advance(50)
        assert not registry.grant_is_active(vault_id, "bob")
        assert registry.get_grant(vault_id, "bob") is not None
        registry.delegate(vault_id, "bob", "contributor", 5, False)
        assert registry.grant_is_active(vault_id, "bob")

    def test_grant_lapses_at_expiry_height(self, registry, clock, vault_id):
        registry.delegate(vault_id, "bob", "observer", 10, False)
        clock.set(START_HEIGHT + 9)
        assert registry.grant_is_active(vault_id, "bob")
        clock.set(START_HEIGHT + 10)
        assert not registry.grant_is_active(vault_id, "bob")

    def test_grants_do_not_authorize_updates(self, registry, host, vault_id):
        registry.delegate(vault_id, "bob", "administrator", 100, True)
        host.identity = "bob"
        outcome = registry.update(vault_id, **_update_fields())
        assert outcome.error is RegistryError.UNAUTHORIZED


def test_scenario(registry, host, clock):
    h1 = "1" * 64
    assert registry.register("Doc A", h1, "summary", "public", ["x"]).value == 1
    assert registry.register("Doc B", "2" * 64, "other", "internal", ["y", "z"]).value == 2

    assert registry.update(1, "Doc A", h1, "new summary", ["x"]).value is True

    host.identity = "bob"
    assert registry.update(1, "Doc A", h1, "hijack", ["x"]).error is RegistryError.UNAUTHORIZED

    host.identity = "alice"
    height = clock.current_height()
    assert registry.delegate(1, "bob", "contributor", 100, True).value is True
    assert registry.get_grant(1, "bob").expires_at == height + 100


def test_atomic_rolls_back_on_error(store, valid_fields):
    from vault.records import AccessGrant

    with pytest.raises(RuntimeError):
        with store.atomic():
            store.set_last_vault_id(1)
            store.put_grant(AccessGrant(1, "bob", "observer", 0, 10))
            raise RuntimeError("boom")

    assert store.last_vault_id() == 0
    assert store.get_grant(1, "bob") is None
