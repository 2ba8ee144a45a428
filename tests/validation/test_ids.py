"""Tests for tsquery.validation.ids."""

import pytest

from tsquery.errors import InvalidIdError, InvalidSyntaxError, MissingFieldError
from tsquery.validation.ids import validate_id


class TestValidateId:
    """Test validate_id() grammar."""

    @pytest.mark.parametrize("id", ["f1", "F1", "1", "my_filter", "my-filter", "a"])
    def test_accepts_valid_ids(self, id):
        validate_id(id)

    @pytest.mark.parametrize("id", ["bad.Id", "has space", "semi;colon", "slash/x", "ünï"])
    def test_rejects_illegal_characters(self, id):
        with pytest.raises(InvalidIdError):
            validate_id(id)

    def test_error_names_the_character(self):
        with pytest.raises(InvalidIdError, match=r"illegal character: \."):
            validate_id("bad.Id")

    def test_invalid_id_is_a_syntax_error(self):
        with pytest.raises(InvalidSyntaxError):
            validate_id("bad.Id")

    @pytest.mark.parametrize("id", [None, ""])
    def test_missing_id(self, id):
        with pytest.raises(MissingFieldError):
            validate_id(id)
