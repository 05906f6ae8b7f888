"""Display labels and study tips keyed by category / pattern id."""

from __future__ import annotations

CATEGORY_LABELS: dict[str, str] = {
    "cvc": "CVC Words",
    "blends": "Blends",
    "digraphs": "Digraphs",
    "silent-e": "Silent E",
    "vowel-teams": "Vowel Teams",
    "r-controlled": "R-Controlled",
    "diphthongs": "Diphthongs",
    "prefixes": "Prefixes",
    "suffixes": "Suffixes",
    "compound": "Compound",
    "multisyllable": "Multisyllable",
    "irregular": "Irregular",
    "latin-roots": "Latin Roots",
    "greek-roots": "Greek Roots",
    "french-origin": "French Origin",
    "competition": "Competition",
    "etymology": "Etymology Quiz",
    "tier-1": "Tier 1 Words",
    "tier-2": "Tier 2 Words",
    "tier-3": "Tier 3 Words",
    "tier-4": "Tier 4 Words",
    "tier-5": "Tier 5 Words",
    "review": "Review Due Words",
}

# One short rule per category, shown as the tip on coaching cards.
CATEGORY_TIPS: dict[str, str] = {
    "silent-e": "A silent e at the end makes the vowel say its name: hop -> hope, cap -> cape.",
    "digraphs": "Short vowel + /k/ = ck (back, deck). Otherwise use k (book, bark).",
    "vowel-teams": "AI mid-word (rain), AY at word end (play), A_E with magic e (cake).",
    "diphthongs": "OU mid-word (house), OW at word end (cow). OI mid-word (coin), OY at the end (boy).",
    "suffixes": "Short vowel + single consonant: double it before -ing/-ed (hop -> hopping).",
    "prefixes": "A prefix never changes the root's spelling: dis + satisfy = dissatisfy.",
    "multisyllable": "Clap the syllables and spell one beat at a time.",
    "irregular": "There is A RAT in sepARATE. Mnemonics beat rules for irregular words.",
    "latin-roots": "-TION after most consonants (nation), -SION after vowels or l/n/r (vision).",
    "greek-roots": "Greek ph says /f/ and ch often says /k/: phone, chorus.",
    "french-origin": "French endings keep their spelling: -ette, -eau, -que.",
    "cvc": "Say each sound slowly, then write one letter per sound.",
    "blends": "Keep both consonants in a blend: st-op, fl-ag, gr-in.",
    "r-controlled": "ER, IR and UR sound alike; learn which one each word uses.",
}


def format_label(key: str) -> str:
    """Human label for a category or pattern id, falling back to title case."""
    if key in CATEGORY_LABELS:
        return CATEGORY_LABELS[key]
    return key.replace("-", " ").replace("_", " ").title()
