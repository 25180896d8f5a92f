"""Prompt templates and sampling options for the generation provider."""

import re

CONTEXT_PROMPT = """[INST] <|system|>You are a helpful assistant. Answer the question based only on the context below. Keep the answer to one or two sentences.</s>
<|user|>Context: {context}

Question: {question}

Answer: [/INST]"""

GENERAL_PROMPT = """[INST] <|system|>You are a helpful assistant. Answer the question helpfully and concisely.</s>
<|user|>Question: {question}

Answer: [/INST]"""

SKILLS_PROMPT = """[INST] <|system|>You extract information from documents.</s>
<|user|>List every technology, programming language, framework and tool mentioned in the text below, grouped by category. Output one item per line and nothing else.

Text:
{context}
[/INST]"""

BASE_OPTIONS = {
    "num_ctx": 2048,
    "temperature": 0.7,
    "top_p": 0.9,
}

CONTEXT_OPTIONS = {**BASE_OPTIONS, "num_predict": 100, "stop": ["\n"]}
GENERAL_OPTIONS = {**BASE_OPTIONS, "num_predict": 200}
SKILLS_OPTIONS = {**BASE_OPTIONS, "temperature": 0.2, "num_predict": 200}

BULLET_PREFIX = re.compile(r"^\s*(?:[-*+•]|\d+[.)])\s*")


def build_context_prompt(context: str, question: str) -> str:
    return CONTEXT_PROMPT.format(context=context, question=question)


def build_general_prompt(question: str) -> str:
    return GENERAL_PROMPT.format(question=question)


def build_skills_prompt(context: str) -> str:
    return SKILLS_PROMPT.format(context=context)


def clean_list_response(text: str) -> str:
    """Strip bullet/number prefixes and drop blank lines."""
    lines = (BULLET_PREFIX.sub("", line).strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)
