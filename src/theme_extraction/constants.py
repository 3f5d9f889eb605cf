"""
Constants used for theme extraction: word lists and rule tables.

All patterns run over normalized text (lowercase, letters/digits/apostrophes,
single spaces), see text_utils.normalize_phrase.
"""
import re

from . import config
from .data_models import Category, DistortionType

# Markers that carry psychological signal; never treated as stopwords
NEGATIONS = {
    "not", "no", "never", "nothing", "nobody", "none", "nowhere", "neither", "nor",
    "cannot", "can't", "won't", "don't", "doesn't", "didn't", "isn't", "aren't",
    "wasn't", "weren't", "couldn't", "shouldn't", "wouldn't", "haven't", "hasn't",
    "hadn't", "mustn't",
}
MODALS = {
    "should", "must", "could", "would", "might", "may", "shall", "will", "can",
    "ought", "need", "needs", "supposed",
}
INTENSIFIERS = {
    "always", "very", "really", "so", "too", "extremely", "totally", "completely",
    "absolutely", "entirely", "utterly", "constantly", "everything", "everyone",
    "anything", "anyone",
}

# Light stopword list: articles, prepositions, pronouns, auxiliaries, connectors
STOPWORDS = {
    "a", "an", "the", "and", "or", "but", "if", "then", "else", "than", "because",
    "as", "until", "while", "though", "although",
    "for", "to", "from", "in", "on", "at", "of", "by", "with", "without",
    "into", "onto", "off", "over", "under", "about", "after", "before", "above",
    "below", "between", "through", "during", "against", "up", "down", "out",
    "again", "further", "once", "here", "there", "where", "when", "why", "how",
    "what", "which", "who", "whom", "whose", "this", "that", "these", "those",
    "i", "me", "my", "mine", "myself", "we", "us", "our", "ours", "ourselves",
    "you", "your", "yours", "yourself", "yourselves", "he", "him", "his", "himself",
    "she", "her", "hers", "herself", "it", "its", "itself", "they", "them", "their",
    "theirs", "themselves",
    "i'm", "i've", "i'll", "i'd", "you're", "you've", "you'll", "you'd", "he's",
    "she's", "it's", "we're", "we've", "we'll", "they're", "they've", "they'll",
    "that's", "there's", "here's", "what's", "let's",
    "am", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "having", "do", "does", "did", "doing", "done",
    "get", "got", "just", "also", "now", "only", "own", "same", "such", "both",
    "each", "few", "more", "most", "other", "some", "any", "all", "etc",
    "s", "t", "ve", "ll", "d", "re", "m",
    # Contraction stems left behind when apostrophes are stripped
    "don", "didn", "doesn", "isn", "aren", "wasn", "weren", "couldn", "shouldn",
    "wouldn", "haven", "hasn", "hadn", "won",
}

FUNCTION_WORDS = STOPWORDS | NEGATIONS | MODALS | INTENSIFIERS

# Single words too vague to stand as a theme on their own
GENERIC_TERMS = {
    "thing", "things", "way", "ways", "stuff", "lot", "lots", "bit", "kind", "sort",
    "time", "times", "day", "days", "today", "yesterday", "tonight", "tomorrow",
    "week", "morning", "night", "something", "someone", "somehow", "somewhere",
    "feel", "feels", "felt", "feeling", "think", "thought", "know", "knew", "want",
    "wanted", "like", "liked", "said", "say", "says", "tell", "told", "make", "made",
    "going", "went", "come", "came", "still", "even", "much", "many", "well",
    "pretty", "actually", "maybe", "probably", "kinda", "sorta", "okay", "ok",
    "yeah", "yes", "one", "two", "first", "last", "next", "back", "around", "another",
}

POSSESSIVE_PRONOUNS = {"my", "his", "her", "our", "their"}

# Nouns naming people by relationship; "my <relation>" is a strong theme anchor
RELATION_NOUNS = (
    "mom", "mum", "mother", "dad", "father", "parents", "sister", "brother",
    "siblings", "son", "daughter", "kids", "children", "baby", "wife", "husband",
    "partner", "boyfriend", "girlfriend", "fiance", "fiancee", "ex", "friend",
    "friends", "best friend", "boss", "manager", "coworker", "coworkers",
    "colleague", "colleagues", "team", "therapist", "doctor", "family", "grandma",
    "grandpa", "grandmother", "grandfather", "aunt", "uncle", "cousin", "roommate",
    "neighbor", "teacher", "dog", "cat",
)
POSSESSIVE_RELATION_RE = re.compile(
    r"\b(?:my|his|her|our|their) (?:" + "|".join(
        re.escape(r) for r in sorted(RELATION_NOUNS, key=len, reverse=True)
    ) + r")(?![a-z0-9])"
)

# spaCy entity labels treated as people, places, organizations
ENTITY_LABELS = {"PERSON", "GPE", "LOC", "ORG", "FAC", "NORP"}

_LABEL_WORDS = (
    r"stupid|worthless|useless|failure|loser|idiot|pathetic|weak|hopeless|broken|"
    r"burden|mess|fraud|unlovable|lazy|disappointment|ugly|boring|annoying|dumb"
)

# Cognitive-pattern table, evaluated in order: (name, pattern, distortion tag, weight)
COGNITIVE_PATTERNS = (
    (
        "negated_predicate",
        re.compile(
            r"\b(?:not|never|no longer)\s+(?:feeling\s+|being\s+)?(?:good|enough|okay|ok|"
            r"happy|worth\w*|loved|wanted|liked|able|sure|safe|smart|ready|fine|right|"
            r"normal|important|welcome|heard|appreciated)(?:\s+enough)?\b"
        ),
        DistortionType.NONE,
        config.PATTERN_WEIGHT_BASE,
    ),
    (
        "contraction_predicate",
        re.compile(
            r"\b(?:can't|cannot|won't|don't|didn't|isn't|wasn't|couldn't|shouldn't)\s+"
            r"(?:even\s+|ever\s+|really\s+)?(?:do|handle|cope|stop|sleep|focus|trust|change|"
            r"win|deal|understand|stand|breathe|relax|think|care|matter|belong|fit|"
            r"measure|keep|get|seem|feel)\b(?:\s+(?:up|in|out|it|anything))?"
        ),
        DistortionType.NONE,
        config.PATTERN_WEIGHT_BASE,
    ),
    (
        "always_never",
        re.compile(r"\b(?:always|never)\s+(?!the\b|a\b|an\b|to\b|be\b)[a-z']{3,}(?:\s+(?:up|out|wrong|right))?"),
        DistortionType.ALL_OR_NOTHING,
        config.PATTERN_WEIGHT_BASE,
    ),
    (
        "modal_obligation",
        re.compile(
            r"\b(?:should(?:n't)?|must|ought to|have to|has to|need to|supposed to)\s+"
            r"(?:have\s+|be\s+|not\s+)?(?!the\b|a\b|an\b)[a-z']{2,}\b"
        ),
        DistortionType.SHOULD_STATEMENTS,
        config.PATTERN_WEIGHT_BASE,
    ),
    (
        "catastrophizing",
        re.compile(
            r"\b(?:terrible|awful|horrible|horrific|disaster|disastrous|catastroph\w*|"
            r"unbearable|ruined|worst|nightmare|end of the world|falling apart|"
            r"can't take it)\b"
        ),
        DistortionType.CATASTROPHIZING,
        config.PATTERN_WEIGHT_BASE,
    ),
    (
        "self_labeling",
        re.compile(
            r"\bi(?:'m| am)\s+(?:such\s+|so\s+|just\s+|really\s+)?(?:a\s+|an\s+|the\s+)?"
            r"(?:total\s+|complete\s+)?(?:" + _LABEL_WORDS + r")\b"
        ),
        DistortionType.LABELING,
        config.PATTERN_WEIGHT_STRONG,
    ),
    (
        "personalizing",
        re.compile(
            r"\b(?:(?:all\s+)?my fault|because of me|i ruined\s+\w+|i caused\s+\w+|"
            r"blame myself|i'm to blame|my responsibility)\b"
        ),
        DistortionType.PERSONALIZING,
        config.PATTERN_WEIGHT_STRONG,
    ),
    (
        "fortune_telling",
        re.compile(
            r"\b(?:will never|won't ever|never going to|going to fail|will always|"
            r"will fail|bound to fail|is going to go wrong|it'll never)(?:\s+(?!the\b|a\b)[a-z']{3,})?"
        ),
        DistortionType.FORTUNE_TELLING,
        config.PATTERN_WEIGHT_BASE,
    ),
)


def _words(*alternatives: str) -> "re.Pattern[str]":
    return re.compile(r"\b(?:" + "|".join(alternatives) + r")")


# Category table, first match wins
CATEGORY_RULES = (
    (Category.PERSON, _words(
        r"(?:" + "|".join(re.escape(r) for r in RELATION_NOUNS) + r")(?:s|'s)?\b",
        r"people\b", r"someone\b", r"everyone\b", r"nobody\b", r"he\b", r"she\b",
    )),
    (Category.PLACE, _words(
        r"home\b", r"work\b", r"office\b", r"school\b", r"house\b", r"apartment\b",
        r"city\b", r"gym\b", r"hospital\b", r"church\b", r"park\b", r"beach\b",
        r"town\b", r"room\b", r"kitchen\b", r"college\b", r"campus\b", r"class\b",
        r"country\b", r"airport\b", r"store\b", r"restaurant\b", r"bed\b",
    )),
    (Category.EMOTION, _words(
        r"anx", r"sad\b", r"sadness\b", r"happy\b", r"happiness\b", r"angr", r"anger\b", r"upset\b", r"stress", r"depress",
        r"lonel", r"scared\b", r"afraid\b", r"fear", r"worr", r"nervous\b", r"guilt",
        r"shame", r"ashamed\b", r"frustrat", r"overwhelm", r"excit", r"grateful\b",
        r"gratitude\b", r"calm\b", r"joy", r"hurt\b", r"tired\b", r"exhausted\b",
        r"panic", r"jealous", r"hopeless", r"hopeful\b", r"proud\b", r"relie",
        r"love\b", r"loved\b", r"hate\b", r"mood\b", r"cry\b", r"crying\b", r"cried\b", r"tears\b",
    )),
    (Category.ACTIVITY, _words(
        r"run", r"walk", r"exercis", r"workout\b", r"yoga\b", r"sleep", r"cook",
        r"read\b", r"reading\b", r"writ", r"meditat", r"stud", r"job\b", r"project\b", r"meeting\b",
        r"wedding\b", r"trip\b", r"travel", r"party\b", r"game", r"music\b", r"paint",
        r"date\b", r"dinner\b", r"lunch\b", r"breakfast\b", r"call", r"deadline\b",
        r"interview\b", r"exam\b", r"presentation\b", r"shopping\b", r"clean",
        r"therapy\b", r"session\b",
    )),
    (Category.COGNITION, _words(
        r"think", r"thought", r"believ", r"should\b", r"must\b", r"never\b", r"always\b",
        r"fault\b", r"wonder", r"remember", r"decid", r"decision", r"know\b",
        r"understand", r"overthink", r"ruminat", r"doubt", r"blame", r"mind\b",
        r"idea\b", r"plan\b", r"expect", r"assum",
    )),
)

# Distortion table, first match wins; the more specific tags come first
DISTORTION_RULES = (
    (DistortionType.PERSONALIZING, _words(
        r"my fault\b", r"because of me\b", r"blame myself\b", r"i'm to blame\b",
        r"i ruined\b", r"i caused\b", r"my responsibility\b",
    )),
    (DistortionType.FORTUNE_TELLING, _words(
        r"will never\b", r"won't ever\b", r"never going to\b", r"going to fail\b",
        r"will always\b", r"will fail\b", r"bound to\b", r"it'll never\b",
        r"going to go wrong\b",
    )),
    (DistortionType.LABELING, _words(
        r"i'm (?:such |so |just |really )?(?:a |an |the )?(?:total |complete )?(?:" + _LABEL_WORDS + r")\b",
        r"i am (?:such |so |just |really )?(?:a |an |the )?(?:total |complete )?(?:" + _LABEL_WORDS + r")\b",
        r"(?:loser|idiot|failure|worthless|pathetic)\b",
    )),
    (DistortionType.SHOULD_STATEMENTS, _words(
        r"should\b", r"shouldn't\b", r"must\b", r"ought\b", r"have to\b", r"has to\b",
        r"supposed to\b", r"need to\b",
    )),
    (DistortionType.CATASTROPHIZING, _words(
        r"terrible\b", r"awful\b", r"horribl", r"horrific\b", r"disast", r"catastroph",
        r"unbearable\b", r"ruined\b", r"worst\b", r"nightmare\b", r"end of the world\b",
        r"falling apart\b",
    )),
    (DistortionType.ALL_OR_NOTHING, _words(
        r"always\b", r"never\b", r"everyone\b", r"nobody\b", r"no one\b", r"nothing\b",
        r"everything\b", r"completely\b", r"totally\b", r"entirely\b", r"all or nothing\b",
    )),
)

POSITIVE_WORDS = _words(
    r"good\b", r"great\b", r"happy\b", r"happier\b", r"happiness\b", r"joy", r"love\b", r"loved\b", r"lovely\b", r"calm\b",
    r"grateful\b", r"gratitude\b", r"proud\b", r"excit", r"hope\b", r"hopeful\b",
    r"relie", r"peace", r"fun\b", r"enjoy", r"better\b", r"confident\b", r"safe\b",
    r"beautiful\b", r"wonderful\b", r"amazing\b", r"content\b", r"thankful\b",
    r"success", r"win\b", r"won\b", r"laugh", r"smil", r"rest\b", r"rested\b", r"support",
)
NEGATIVE_WORDS = _words(
    r"bad\b", r"sad\b", r"sadness\b", r"anx", r"angr", r"anger\b", r"upset\b", r"stress", r"depress",
    r"lonel", r"scared\b", r"afraid\b", r"fear", r"worr", r"nervous\b", r"guilt",
    r"shame", r"ashamed\b", r"frustrat", r"overwhelm", r"hurt\b", r"tired\b",
    r"exhausted\b", r"panic", r"jealous", r"hopeless", r"terrible\b", r"awful\b",
    r"horribl", r"worst\b", r"hate\b", r"fail", r"stupid\b", r"worthless\b", r"useless\b",
    r"cry\b", r"crying\b", r"cried\b", r"pain\b", r"painful\b", r"sick\b", r"fight", r"argu", r"lost\b", r"miss\b", r"missed\b", r"missing\b",
    r"disaster", r"nightmare\b", r"fault\b", r"broken\b", r"loser\b", r"idiot\b",
)
NEGATION_RE = re.compile(
    r"\b(?:not|no|never|nothing|nobody|none|nowhere|neither|nor|cannot|no one)\b|"
    r"\b[a-z]+n't\b"
)
