"""
Unit tests for DataTransformer
"""
import io

from kickstarter_etl.etl.reader import CSVReader
from kickstarter_etl.etl.records import SourceRecord
from kickstarter_etl.etl.transformer import DataTransformer
from tests.unit.csv_factory import make_csv, make_row


def source_record(kickstarter_id: int, **overrides) -> SourceRecord:
    values = {
        "id": kickstarter_id,
        "name": f"Project {kickstarter_id}",
        "category": "Art",
        "main_category": "Art",
        "currency": "USD",
        "deadline": "2020-01-01",
        "launched": "2019-01-01",
        "state": "successful",
        "country": "US",
        "backers": 10,
        "goal": 1000.0,
        "pledged": 500.0,
        "usd_pledged": 480.0,
        "usd_pledged_real": 490.0,
        "usd_goal_real": 990.0,
    }
    values.update(overrides)
    return SourceRecord(**values)


class TestDataTransformer:
    """Test suite for DataTransformer class"""

    def test_empty_input(self):
        """Test no records produce no kickstarts"""
        assert DataTransformer().transform([]) == []

    def test_surrogate_keys_are_dense_and_ordered(self):
        """Test keys are exactly 1..N in input order"""
        records = [source_record(i) for i in (900, 100, 500, 300)]

        kickstarts = DataTransformer().transform(records)

        assert [k.product_id for k in kickstarts] == [1, 2, 3, 4]
        assert [k.product.kickstarter_id for k in kickstarts] == [900, 100, 500, 300]

    def test_all_entities_of_a_record_share_its_key(self):
        """Test every dimension and the fact use the same key"""
        kickstarts = DataTransformer().transform([source_record(7), source_record(8)])

        second = kickstarts[1]
        dimension_keys = {
            second.product.id,
            second.main_category.id,
            second.category.id,
            second.currency.id,
            second.date.id,
            second.state.id,
            second.area.id,
        }
        fact_keys = {
            second.product_id,
            second.main_category_id,
            second.category_id,
            second.currency_id,
            second.date_id,
            second.state_id,
            second.area_id,
        }
        assert dimension_keys == fact_keys == {2}

    def test_dimensions_are_not_deduplicated(self):
        """Test repeated labels still produce one dimension per record"""
        kickstarts = DataTransformer().transform([source_record(1), source_record(2)])

        assert kickstarts[0].currency.type == kickstarts[1].currency.type == "USD"
        assert kickstarts[0].currency.id == 1
        assert kickstarts[1].currency.id == 2

    def test_measures_are_copied(self):
        """Test numeric fields map onto the fact"""
        kickstart = DataTransformer().transform([source_record(1)])[0]

        assert kickstart.backers == 10
        assert kickstart.goal == 1000.0
        assert kickstart.goal_usd_real == 990.0
        assert kickstart.pledged == 500.0
        assert kickstart.pledged_usd == 480.0
        assert kickstart.pledged_usd_real == 490.0

    def test_dates_carried_as_strings(self):
        """Test launch and deadline strings reach the date dimension untouched"""
        kickstart = DataTransformer().transform([source_record(1, launched="2019-01-01 10:00:00")])[0]

        assert kickstart.date.launched == "2019-01-01 10:00:00"
        assert kickstart.date.deadline == "2020-01-01"

    def test_labels_round_trip_from_csv(self):
        """Test decoded then normalized rows give back the source labels"""
        rows = [
            make_row(kickstarter_id=11, name="Fancy Pen", category="Product Design", main_category="Design"),
            make_row(kickstarter_id=12, name="Short Film", category="Shorts", main_category="Film & Video",
                     currency="EUR", state="failed", country="DE"),
        ]
        records = CSVReader(io.BytesIO(make_csv(*rows))).read_records()

        kickstarts = DataTransformer().transform(records)

        extracted = [
            (k.product.kickstarter_id, k.product.name, k.category.name, k.main_category.name,
             k.currency.type, k.state.state, k.area.country)
            for k in kickstarts
        ]
        assert extracted == [
            (11, "Fancy Pen", "Product Design", "Design", "USD", "successful", "US"),
            (12, "Short Film", "Shorts", "Film & Video", "EUR", "failed", "DE"),
        ]
