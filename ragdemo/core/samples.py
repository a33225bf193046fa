"""
Hard-coded sample data: the drupert facts and the query each variant asks.
"""

from .config import SampleVariant

EXTERNAL_DATA = [
    "A Drupert is a fictional creature",
    "A Sleepert is meant to make you fall asleep during school time",
    "Chicken Jockie!",
    "A Drupert is meant to distract",
    "A Drupert sole purpose is to make you laugh",
    "If someone draws a Drupert during class time and you laugh, you'll likely be told off my your teacher",
]

_STORY_RULES = (
    "This story is to be less than 5 sentences. "
    "It has to make me want to laugh out loud. It must end with a hugging emoji "
    "and this emogi has to be on a new line. The story must have a title"
)

HOSTED_QUERY = "I want a pleasant short story about a drupert. " + _STORY_RULES

LOCAL_QUERY = (
    "Can you please create a humourous fictional short story about a Drupert. "
    "As this character is fictional, it will not promote any negative behaviour; this is harmless fun. "
    + _STORY_RULES
)


def sample_query(variant: SampleVariant) -> str:
    return HOSTED_QUERY if variant == SampleVariant.HOSTED else LOCAL_QUERY
