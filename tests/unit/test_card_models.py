from cardvault.cards.models import CardAttributes
from cardvault.cards.text import card_to_text
from tests.factories import make_card, make_record


class TestCardAttributes:
    def test_grade_label_drops_trailing_zero(self) -> None:
        assert make_card(grade=10.0).grade_label == "10"
        assert make_card(grade=8.5).grade_label == "8.5"

    def test_to_dict(self) -> None:
        assert make_card().to_dict() == {
            "subject": "LeBron James",
            "year": "2003-04",
            "manufacturer": "Topps",
            "grade": 10.0,
            "identifier": "12345678",
            "sub_category": "Chrome",
            "sub_number": "#111",
        }


class TestCardRecord:
    def test_to_dict_omits_vectors(self) -> None:
        record = make_record(make_card(), [0.1], [0.2])
        data = record.to_dict()
        assert data["identifier"] == "12345678"
        assert data["image_path"] == "/cards/12345678.png"
        assert "text_embedding" not in data
        assert "image_embedding" not in data


class TestCardToText:
    def test_includes_attributes(self) -> None:
        text = card_to_text(make_card())
        assert "Player: LeBron James" in text
        assert "PSA Grade: 10/10" in text
        assert "Set: Chrome" in text
        assert "Card Number: #111" in text

    def test_skips_missing_optionals(self) -> None:
        card = CardAttributes(
            subject="Larry Bird", year="1980", manufacturer="Topps", grade=9.0, identifier="1"
        )
        text = card_to_text(card)
        assert "Set:" not in text
        assert "Card Number:" not in text
