"""
Display Tool: Static Sanskrit grammar reference.

Holds the grammar explorer tables (Kṛṣṇa declined through the eight cases,
√bhū conjugated in present, imperative and future) with their notes, plus
the beginner primer shown on the dashboard and the verse page.
"""

from __future__ import annotations

from typing import Optional

from gita_study.schemas.grammar_output import (
    GrammarExplorer,
    ParadigmRow,
    ParadigmTable,
    PrimerConcept,
    ReferenceNote,
)

# (case, singular, dual, plural, usage)
DECLENSION_KRSNA: list[tuple[str, str, str, str, str]] = [
    ("Nominative", "Kṛṣṇaḥ", "Kṛṣṇau", "Kṛṣṇāḥ", 'The doer: "Kṛṣṇa speaks"'),
    ("Accusative", "Kṛṣṇam", "Kṛṣṇau", "Kṛṣṇān", 'The receiver: "I see Kṛṣṇa"'),
    ("Instrumental", "Kṛṣṇena", "Kṛṣṇābhyām", "Kṛṣṇaiḥ", 'By/with: "with Kṛṣṇa"'),
    ("Dative", "Kṛṣṇāya", "Kṛṣṇābhyām", "Kṛṣṇebhyaḥ", 'For/to: "for Kṛṣṇa"'),
    ("Ablative", "Kṛṣṇāt", "Kṛṣṇābhyām", "Kṛṣṇebhyaḥ", 'From: "from Kṛṣṇa"'),
    ("Genitive", "Kṛṣṇasya", "Kṛṣṇayoḥ", "Kṛṣṇānām", 'Of/belonging to: "of Kṛṣṇa"'),
    ("Locative", "Kṛṣṇe", "Kṛṣṇayoḥ", "Kṛṣṇeṣu", 'In/on: "in Kṛṣṇa"'),
    ("Vocative", "Kṛṣṇa!", "Kṛṣṇau!", "Kṛṣṇāḥ!", 'Calling: "O Kṛṣṇa!"'),
]

# (title, lakara, rows of (person, singular, dual, plural))
CONJUGATIONS_BHU: list[tuple[str, str, list[tuple[str, str, str, str]]]] = [
    ("Present Tense", "Laṭ", [
        ("3rd Person (he/she/it)", "bhavati", "bhavataḥ", "bhavanti"),
        ("2nd Person (you)", "bhavasi", "bhavathaḥ", "bhavatha"),
        ("1st Person (I/we)", "bhavāmi", "bhavāvaḥ", "bhavāmaḥ"),
    ]),
    ("Imperative", "Loṭ", [
        ("3rd Person", "bhavatu", "bhavatām", "bhavantu"),
        ("2nd Person", "bhava", "bhavatam", "bhavata"),
        ("1st Person", "bhavāni", "bhavāva", "bhavāma"),
    ]),
    ("Future Tense", "Lṛṭ", [
        ("3rd Person", "bhaviṣyati", "bhaviṣyataḥ", "bhaviṣyanti"),
        ("2nd Person", "bhaviṣyasi", "bhaviṣyathaḥ", "bhaviṣyatha"),
        ("1st Person", "bhaviṣyāmi", "bhaviṣyāvaḥ", "bhaviṣyāmaḥ"),
    ]),
]

DECLENSION_NOTE = (
    "In Sanskrit, nouns change their ending depending on their role in the "
    'sentence. This is called "declension." Below is how the name Kṛṣṇa '
    "changes across all eight cases."
)

CONJUGATION_NOTE = (
    "Sanskrit verbs change based on who is doing the action (person) and how "
    "many (number). The root √bhū is one of the most common verbs."
)

PARTICIPLE_NOTE = ReferenceNote(
    title="Past Participle",
    body=(
        'bhūta: "that which has become" or "having been." You see this in the '
        'word "bhūta" meaning a living being (one who has come into existence).'
    ),
)

KEY_CONCEPTS: list[tuple[str, str]] = [
    ("1st Person",
     'First person means "I" or "we." The speaker is talking about themselves. '
     "When you see a 1st-person verb, the speaker is the one doing the action."),
    ("2nd Person",
     'Second person means "you." The speaker is addressing someone directly. '
     "In the Gita, Krishna often uses 2nd person when speaking to Arjuna."),
    ("3rd Person",
     'Third person means "he," "she," "it," or "they." The speaker is talking '
     "about someone else. Most narrative descriptions use 3rd person."),
    ("Masculine / Feminine / Neuter",
     "Every Sanskrit noun has a grammatical gender. This affects which endings "
     'the word takes. "Dharma" is masculine, "vidyā" is feminine, "jñāna" '
     "(knowledge) is neuter."),
    ("Past Participle",
     'A past participle describes a completed action, like "spoken," "done," '
     'or "abandoned" in English. In Sanskrit, these often end in -ta or -na. '
     "Example: kṛta = done."),
    ("Imperative",
     "The imperative is a command form: someone is directly telling someone "
     'else to do something. "vraja" (surrender!) in BG 18.66 is imperative. '
     "It carries authority."),
    ("Future Tense",
     'Future tense means "I will do" or "it will happen." In BG 18.66, '
     '"mokṣayiṣyāmi" (I will liberate) is future tense: Krishna making a '
     "personal promise."),
]

PRIMER: list[PrimerConcept] = [
    PrimerConcept(
        term="Verb Root (Dhatu)",
        sanskrit="धातु",
        explanation=(
            "A verb root is the most basic form of a verb, the seed from which "
            'different verb forms grow. In English, think of "go" as a root that '
            'becomes "goes", "going", "went". In Sanskrit, "muc" (to release) is '
            'the root behind "moksayisyami" (I will release).'
        ),
        verse_example=(
            'In this verse, "tyaj" (to abandon) is the root behind "parityajya" '
            "(having abandoned)."
        ),
    ),
    PrimerConcept(
        term="Grammatical Case",
        sanskrit="विभक्ति",
        explanation=(
            "A case tells you the role a word plays in a sentence: is it the doer, "
            "the receiver, or something else? English uses word order (\"The dog "
            'bit the man" vs "The man bit the dog"). Sanskrit uses case endings '
            "instead, so word order is flexible."
        ),
        verse_example=(
            '"mam" is in the accusative case, meaning it is the object, the one '
            'receiving the action. Krishna is saying "come to Me": He is the '
            "destination."
        ),
    ),
    PrimerConcept(
        term="1st Person",
        explanation=(
            'First person means "I" or "we": the speaker is talking about '
            "themselves. When you see a 1st-person verb, the speaker is the one "
            "doing the action."
        ),
        verse_example=(
            '"moksayisyami" is 1st person. Krishna Himself is saying "I will '
            'release you." He is personally making this promise.'
        ),
    ),
    PrimerConcept(
        term="2nd Person",
        explanation=(
            'Second person means "you": the speaker is addressing someone '
            "directly. When you see a 2nd-person verb or pronoun, someone is "
            "being spoken to."
        ),
        verse_example=(
            '"tvam" (you) is 2nd person: Krishna is directly addressing Arjuna. '
            '"vraja" (go/surrender) is also 2nd person, a direct instruction to '
            "Arjuna."
        ),
    ),
    PrimerConcept(
        term="Masculine / Feminine / Neuter",
        explanation=(
            "In Sanskrit, every noun has a gender: masculine, feminine, or neuter. "
            "This is a grammatical property, not always about actual gender. The "
            "gender affects which endings the word takes."
        ),
        verse_example=(
            '"dharma" is masculine. "sarana" (shelter) is neuter. The endings '
            "change depending on gender and case."
        ),
    ),
    PrimerConcept(
        term="Past Participle",
        sanskrit="क्त / क्तवतु",
        explanation=(
            "A past participle describes an action that has already been "
            'completed. In English: "abandoned", "spoken", "done". In Sanskrit, '
            "these forms often end in -ta or -na."
        ),
        verse_example=(
            '"parityajya" uses a related form: it means "having abandoned." The '
            "action of abandoning comes first, then the next action follows."
        ),
    ),
    PrimerConcept(
        term="Imperative",
        sanskrit="लोट्",
        explanation=(
            "The imperative is a command form. It means someone is directly "
            'telling someone else to do something. No "please" or "maybe": it '
            "is a direct instruction."
        ),
        verse_example=(
            '"vraja" (surrender / go) is imperative. Krishna is directly '
            'commanding Arjuna: "Surrender unto Me!" It carries authority and '
            "urgency."
        ),
    ),
    PrimerConcept(
        term="Future Tense",
        sanskrit="लृट्",
        explanation=(
            'Future tense means "I will do" or "it will happen." It describes an '
            "action that has not happened yet but is promised or expected."
        ),
        verse_example=(
            '"moksayisyami" is future tense: "I will liberate." Krishna is making '
            "a personal promise about what He will do. This is not a hope, it is "
            "a divine guarantee."
        ),
    ),
]


def noun_declension() -> ParadigmTable:
    return ParadigmTable(
        title="Noun Declension: Kṛṣṇa (masculine, a-stem)",
        rows=[
            ParadigmRow(label=case, singular=s, dual=d, plural=p, usage=usage)
            for case, s, d, p, usage in DECLENSION_KRSNA
        ],
    )


def verb_conjugations() -> list[ParadigmTable]:
    return [
        ParadigmTable(
            title=title,
            lakara=lakara,
            rows=[ParadigmRow(label=person, singular=s, dual=d, plural=p)
                  for person, s, d, p in rows],
        )
        for title, lakara, rows in CONJUGATIONS_BHU
    ]


def grammar_explorer() -> GrammarExplorer:
    """Assemble the explorer page: nouns, verbs and key concepts."""
    return GrammarExplorer(
        declension_stem="Kṛṣṇa",
        declension_note=DECLENSION_NOTE,
        declension=noun_declension(),
        conjugation_root="√bhū",
        conjugation_note=CONJUGATION_NOTE,
        conjugations=verb_conjugations(),
        participle=PARTICIPLE_NOTE,
        key_concepts=[ReferenceNote(title=t, body=b) for t, b in KEY_CONCEPTS],
    )


def grammar_primer() -> list[PrimerConcept]:
    return [c.model_copy() for c in PRIMER]


def find_primer_concept(term: str) -> Optional[PrimerConcept]:
    """Case-insensitive lookup of a primer entry by its term."""
    wanted = term.strip().lower()
    for concept in PRIMER:
        if concept.term.lower() == wanted:
            return concept.model_copy()
    return None
