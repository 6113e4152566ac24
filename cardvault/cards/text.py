from cardvault.cards.models import CardAttributes


def card_to_text(card: CardAttributes) -> str:
    """Render card attributes as descriptive text for the text embedding."""
    parts = [
        f"Player: {card.subject}",
        f"Year: {card.year}",
        f"Brand: {card.manufacturer}",
        f"PSA Grade: {card.grade_label}/10",
        f"Certification: {card.identifier}",
    ]
    if card.sub_category:
        parts.append(f"Set: {card.sub_category}")
    if card.sub_number:
        parts.append(f"Card Number: {card.sub_number}")
    parts.append(
        f"This is a {card.manufacturer} {card.year} {card.subject} trading card "
        f"graded PSA {card.grade_label}."
    )
    return ". ".join(parts)
