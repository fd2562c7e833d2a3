import uuid
from types import SimpleNamespace

import pytest

from core.config import COLOR_CONSUMABLE, COLOR_OTHER, InventoryConfig, Settings, start_case
from core.derivation import (
    item_code_from_name,
    validate_and_derive_adjustment,
    validate_and_derive_item,
    validate_and_derive_stock,
)
from core.errors import ValidationError


@pytest.fixture
def config() -> InventoryConfig:
    return InventoryConfig()


class TestItemDerivation:
    """Code, color and defaults derived before an item is written."""

    @pytest.mark.parametrize(
        "name, code",
        [("Bar Soap", "BS"), ("BAR SOAP", "BS"), ("water  purification kit", "WPK"), ("Tent", "T")],
    )
    def test_code_from_name_initials(self, name, code):
        assert item_code_from_name(name) == code

    def test_defaults_for_name_only(self, config):
        item = validate_and_derive_item({"name": "BAR SOAP"}, config)
        assert item["code"] == "BS"
        assert item["type"] == "Other"
        assert item["color"] == COLOR_OTHER
        assert item["uom"] == "unit"
        assert item["min_stock_allowed"] == 0
        assert item["max_stock_allowed"] == 0
        assert item["expirable"] is False

    def test_given_code_is_kept_upper_cased(self, config):
        item = validate_and_derive_item({"name": "Bar Soap", "code": "soap-01"}, config)
        assert item["code"] == "SOAP-01"

    def test_color_follows_type(self, config):
        item = validate_and_derive_item(
            {"name": "Bar Soap", "type": "Consumable", "color": "#000000"}, config
        )
        assert item["color"] == COLOR_CONSUMABLE

    def test_type_without_color_gets_default_color(self):
        config = InventoryConfig(item_types=("Other", "Staff"))
        item = validate_and_derive_item({"name": "Nurse", "type": "Staff"}, config)
        assert item["color"] == config.default_color

    def test_name_is_start_cased(self, config):
        item = validate_and_derive_item({"name": "  family tent "}, config)
        assert item["name"] == "Family Tent"
        assert item["code"] == "FT"

    @pytest.mark.parametrize("raw", ["bar soap", "BAR SOAP", "Bar Soap", "bAR  sOAP"])
    def test_start_case_gives_one_form_per_name(self, raw):
        assert start_case(raw) == "Bar Soap"

    def test_upper_cased_name_is_normalized(self, config):
        item = validate_and_derive_item({"name": "BAR SOAP"}, config)
        assert item["name"] == "Bar Soap"
        assert item["code"] == "BS"

    def test_uom_lower_cased(self, config):
        assert validate_and_derive_item({"name": "Tent", "uom": "Kit"}, config)["uom"] == "kit"

    def test_rejects_unknown_type_and_uom(self, config):
        with pytest.raises(ValidationError) as exc:
            validate_and_derive_item({"name": "Tent", "type": "Spaceship", "uom": "parsec"}, config)
        assert set(exc.value.errors) == {"type", "uom"}

    def test_rejects_missing_name(self, config):
        with pytest.raises(ValidationError) as exc:
            validate_and_derive_item({"type": "Other"}, config)
        assert "name" in exc.value.errors

    def test_rejects_negative_stock_limits(self, config):
        with pytest.raises(ValidationError) as exc:
            validate_and_derive_item({"name": "Tent", "min_stock_allowed": -1}, config)
        assert "min_stock_allowed" in exc.value.errors


class TestStockDerivation:
    def test_numbers_default_to_zero(self):
        ids = {k: uuid.uuid4() for k in ("store_id", "owner_id", "item_id")}
        stock = validate_and_derive_stock(ids)
        assert stock["quantity"] == 0
        assert stock["min_allowed"] == 0
        assert stock["max_allowed"] == 0

    def test_requires_references(self):
        with pytest.raises(ValidationError) as exc:
            validate_and_derive_stock({"quantity": 1})
        assert set(exc.value.errors) == {"store_id", "owner_id", "item_id"}


class TestAdjustmentDerivation:
    def _record(self, **overrides):
        record = {
            "type": "Addition",
            "reason": "Purchased",
            "stock_id": uuid.uuid4(),
            "party_id": uuid.uuid4(),
            "quantity": 5,
            "cost": 100,
            "remarks": "Restock after floods",
        }
        record.update(overrides)
        return record

    def test_item_and_store_backfilled_from_stock(self, config):
        stock = SimpleNamespace(item_id=uuid.uuid4(), store_id=uuid.uuid4())
        adjustment = validate_and_derive_adjustment(self._record(), config, stock)
        assert adjustment["item_id"] == stock.item_id
        assert adjustment["store_id"] == stock.store_id

    def test_explicit_item_and_store_win(self, config):
        stock = SimpleNamespace(item_id=uuid.uuid4(), store_id=uuid.uuid4())
        item_id, store_id = uuid.uuid4(), uuid.uuid4()
        adjustment = validate_and_derive_adjustment(
            self._record(item_id=item_id, store_id=store_id), config, stock
        )
        assert adjustment["item_id"] == item_id
        assert adjustment["store_id"] == store_id

    def test_rejects_unknown_reason_and_missing_remarks(self, config):
        stock = SimpleNamespace(item_id=uuid.uuid4(), store_id=uuid.uuid4())
        with pytest.raises(ValidationError) as exc:
            validate_and_derive_adjustment(self._record(reason="Stolen", remarks=" "), config, stock)
        assert set(exc.value.errors) == {"reason", "remarks"}

    def test_quantity_and_cost_required(self, config):
        stock = SimpleNamespace(item_id=uuid.uuid4(), store_id=uuid.uuid4())
        with pytest.raises(ValidationError) as exc:
            validate_and_derive_adjustment(self._record(quantity=None, cost=-1), config, stock)
        assert set(exc.value.errors) == {"quantity", "cost"}

    def test_without_stock_item_and_store_are_required(self, config):
        with pytest.raises(ValidationError) as exc:
            validate_and_derive_adjustment(self._record(), config)
        assert {"item_id", "store_id"} <= set(exc.value.errors)


class TestInventoryConfig:
    def test_from_settings_normalizes_enums(self):
        s = Settings()
        s.item_types = ["first aid", "Vehicle"]
        s.item_uoms = ["Litre"]
        config = InventoryConfig.from_settings(s)
        assert config.item_types == ("First Aid", "Other", "Vehicle")
        assert config.item_uoms == ("litre", "unit")

    def test_color_for_is_case_insensitive(self):
        assert InventoryConfig().color_for("consumable") == COLOR_CONSUMABLE
