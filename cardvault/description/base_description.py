from cardvault.cards.models import CardAttributes


def build_base_description(card: CardAttributes, verification_url: str | None = None) -> str:
    """Deterministic description built only from known attributes."""
    description = f"This is a PSA {card.grade_label} graded {card.year} {card.manufacturer}"
    if card.sub_category:
        description += f" {card.sub_category}"
    description += f" card featuring {card.subject}."
    if card.sub_number:
        description += f" Card number: {card.sub_number}."
    description += f" PSA Certification: {card.identifier}."
    if verification_url:
        description += f" You can verify this card at {verification_url}."
    return description
