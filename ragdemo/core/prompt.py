"""
Prompt assembly: frame retrieved facts so the model answers only from them and cites their ids.
"""

from typing import Callable, Iterable, Optional, Tuple, Union

from ..vector.types import SearchResult

DEFAULT_SUBJECT = "druperts"

PROMPT_TEMPLATE = """Give an answer using ONLY information from the following product manual extracts.
If the product manual doesn't contain the information, you should say so.
Do not make up information beyond what is given.
Whenever relevant, specify fact_extract id to cite the factual extract that your answer is based on.
Please include the fact_extract ids that were used to generate this story, at the end of the story.
The format of this fact_extract ids must be, and they must be listed in ascending order:

   Facts: [ids]

These are the facts about {subject}:
{facts}

User question: {{{query}}}"""

Fact = Union[Tuple[int, str], SearchResult]


def format_fact(fact_id: int, text: str) -> str:
    return f"<fact_extract id='{fact_id}'>{text}</fact_extract>"


def _as_pair(fact: Fact) -> Tuple[int, str]:
    if isinstance(fact, SearchResult):
        return fact.record.id, fact.record.value
    fact_id, text = fact
    return fact_id, text


def build_prompt(ranked_facts: Iterable[Fact], user_query: str, subject: str = DEFAULT_SUBJECT,
                 echo: Optional[Callable[[str], None]] = None) -> str:
    """
    Build the grounded prompt.

    Facts are inserted in the order given (retrieval rank); they are not
    re-sorted by id. Each fact is an (id, text) pair or a SearchResult.
    When echo is given the prompt is echoed surrounded by blank lines.
    """
    facts = "\n".join(format_fact(*_as_pair(fact)) for fact in ranked_facts)
    contents = PROMPT_TEMPLATE.format(subject=subject, facts=facts, query=user_query)

    if echo is not None:
        echo("")
        echo(contents)
        echo("")
    return contents
