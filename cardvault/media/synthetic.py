"""Synthetic card data for training/demo samples derived from a real card image."""

import random

from cardvault.cards.models import CardAttributes

PLAYERS = (
    "LeBron James",
    "Michael Jordan",
    "Kobe Bryant",
    "Stephen Curry",
    "Kevin Durant",
    "Magic Johnson",
    "Larry Bird",
    "Shaquille O'Neal",
    "Tim Duncan",
    "Kareem Abdul-Jabbar",
    "Hakeem Olajuwon",
    "Charles Barkley",
    "Scottie Pippen",
    "Allen Iverson",
    "Dwyane Wade",
)
BRANDS = ("Topps", "Panini", "Upper Deck", "Fleer", "Hoops", "Donruss", "Skybox", "Score")
SET_NAMES = ("Chrome", "Prizm", "Select", "Mosaic", "Optic", "Base Set", "Finest", "Revolution")


def synthetic_attributes(rng: random.Random) -> CardAttributes:
    start = 1985 + rng.randrange(40)
    return CardAttributes(
        subject=rng.choice(PLAYERS),
        year=f"{start}-{(start + 1) % 100:02d}",
        manufacturer=rng.choice(BRANDS),
        grade=float(rng.randint(7, 10)),
        identifier=str(rng.randint(10_000_000, 99_999_999)),
        sub_category=rng.choice(SET_NAMES),
        sub_number=f"#{rng.randint(1, 300)}",
    )


def edit_prompt(card: CardAttributes) -> str:
    return f"""Edit this PSA graded basketball card image with the following changes:

1. REPLACE ALL TEXT on the PSA label (the red label at the top of the slab):
   - Change the player name to: "{card.subject}"
   - Change the year to: "{card.year}"
   - Change the brand to: "{card.manufacturer}"
   - Change the PSA grade number to: "{card.grade_label}"
   - Change the certification number to: "{card.identifier}"

2. KEEP the actual card image inside the slab EXACTLY THE SAME.

3. CHANGE THE BACKGROUND: place the card on a wooden collector's desk with other
   trading cards around it, with soft studio lighting.

Keep the PSA slab holder authentic. Only modify the label text, not the card artwork."""
