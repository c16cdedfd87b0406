"""
Unit Tests - Data Quality
"""
import polars as pl
import pytest

from retail_insights.quality.validators import (
    DataValidator,
    ValidationSeverity,
    ValidationStatus,
    create_order_lines_validator,
)


class TestDataValidator:
    """Tests for DataValidator"""

    def test_not_null_check_passes(self):
        """Test not null check with valid data"""
        df = pl.DataFrame({"region": ["East", "West", "South"]})

        validator = DataValidator()
        validator.add_not_null_check("region")

        result = validator.validate(df)

        assert result.status == ValidationStatus.PASSED
        assert result.passed_checks == 1

    def test_not_null_check_fails(self):
        """Test not null check with null values"""
        df = pl.DataFrame({"region": ["East", None, "South"]})

        validator = DataValidator()
        validator.add_not_null_check("region")

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.failed_checks == 1
        assert result.checks[0].failed_rows == 1

    def test_missing_column_fails(self):
        """Test check on an absent column"""
        validator = DataValidator().add_not_null_check("region")

        result = validator.validate(pl.DataFrame({"city": ["Henderson"]}))

        assert result.status == ValidationStatus.FAILED
        assert "not found" in result.errors[0].message

    def test_range_check(self):
        """Test range check"""
        df = pl.DataFrame({"quantity": [1, 5, -2, 200]})

        validator = DataValidator()
        validator.add_range_check("quantity", min_value=0, max_value=100)

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED
        # -2 and 200
        assert result.checks[0].failed_rows == 2

    def test_range_check_on_text_column(self):
        """Test range check rejects non-numeric columns"""
        df = pl.DataFrame({"quantity": ["1", "2"]})

        result = DataValidator().add_range_check("quantity", min_value=0).validate(df)

        assert result.status == ValidationStatus.FAILED
        assert "not numeric" in result.checks[0].message

    def test_non_negative_check(self):
        """Test non-negative check"""
        df = pl.DataFrame({"quantity": [0, 1, 2]})

        result = DataValidator().add_non_negative_check("quantity").validate(df)

        assert result.status == ValidationStatus.PASSED

    def test_custom_check(self):
        """Test custom validation"""
        df = pl.DataFrame({"sale_price": ["10.00", "20.00"]})

        validator = DataValidator()
        validator.add_custom_check(
            "has_rows",
            lambda d: d.height > 0,
            "Frame is empty",
        )

        assert validator.validate(df).status == ValidationStatus.PASSED

    def test_custom_check_polars_error(self):
        """Test custom check that raises inside polars"""
        validator = DataValidator().add_custom_check(
            "bad_column",
            lambda d: d.select(pl.col("missing")).height > 0,
            "never used",
        )

        result = validator.validate(pl.DataFrame({"a": [1]}))

        assert result.status == ValidationStatus.FAILED
        assert "error" in result.checks[0].message

    def test_warning_severity(self):
        """Test warning severity gives partial status"""
        df = pl.DataFrame({"city": [None, "Henderson"]})

        validator = DataValidator()
        validator.add_not_null_check("city", severity=ValidationSeverity.WARNING)

        result = validator.validate(df)

        assert result.status == ValidationStatus.PARTIAL
        assert result.warning_count == 1
        assert result.errors == []

    def test_strict_mode(self):
        """Test strict mode fails on warnings"""
        df = pl.DataFrame({"city": [None, "Henderson"]})

        validator = DataValidator(strict_mode=True)
        validator.add_not_null_check("city", severity=ValidationSeverity.WARNING)

        assert validator.validate(df).status == ValidationStatus.FAILED

    def test_success_rate(self):
        """Test success rate calculation"""
        df = pl.DataFrame({"region": ["East", None], "quantity": [1, 2]})

        validator = DataValidator()
        validator.add_not_null_check("region")
        validator.add_not_null_check("quantity")

        result = validator.validate(df)

        assert result.success_rate == pytest.approx(50.0)

    def test_reset(self):
        """Test reset clears checks"""
        validator = DataValidator().add_not_null_check("region")
        validator.reset()

        assert validator.validate(pl.DataFrame({"a": [1]})).total_checks == 0


class TestOrderLinesValidator:
    """Tests for the pre-configured order-lines validator"""

    def test_sample_frame_passes(self, sample_frame):
        """Test the sample fact table is accepted"""
        result = create_order_lines_validator().validate(sample_frame)

        assert result.status == ValidationStatus.PASSED

    def test_text_dates_pass(self, sample_frame):
        """Test dates read as text are accepted"""
        df = sample_frame.with_columns(pl.col("order_date").cast(pl.Utf8))

        assert create_order_lines_validator().validate(df).status == ValidationStatus.PASSED

    def test_null_region_fails(self, sample_frame):
        """Test a missing region rejects the frame"""
        df = sample_frame.with_columns(
            pl.when(pl.col("order_id") == 3).then(None).otherwise(pl.col("region")).alias("region")
        )

        result = create_order_lines_validator().validate(df)

        assert [c.name for c in result.errors] == ["not_null_region"]

    def test_negative_quantity_fails(self, sample_frame):
        """Test negative quantities are rejected"""
        df = sample_frame.with_columns(pl.lit(-1).alias("quantity"))

        result = create_order_lines_validator().validate(df)

        assert "range_quantity" in [c.name for c in result.errors]

    def test_missing_money_column_fails(self, sample_frame):
        """Test frames without profit are rejected"""
        result = create_order_lines_validator().validate(sample_frame.drop("profit"))

        names = [c.name for c in result.errors]
        assert "money_columns_present" in names
        assert "not_null_profit" in names

    def test_numeric_order_date_fails(self, sample_frame):
        """Test integer dates are rejected"""
        df = sample_frame.with_columns(pl.lit(20220110).alias("order_date"))

        result = create_order_lines_validator().validate(df)

        assert "order_date_type" in [c.name for c in result.errors]
