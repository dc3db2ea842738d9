"""Промпты для Gemini."""

from typing import Sequence


def document_context(documents: Sequence) -> str:
    return "\n".join(
        f"Title: {doc.title}\nContent: {doc.content}\n---" for doc in documents
    )


def summary_prompt(content: str) -> str:
    return (
        "Please provide a concise summary (2-3 sentences) of the following "
        f"document content:\n\n{content}"
    )


def tags_prompt(content: str) -> str:
    return (
        "Based on the following document content, generate 3-5 relevant tags "
        "(single words or short phrases). Return only the tags separated by "
        f"commas:\n\n{content}"
    )


def semantic_search_prompt(query: str, documents: Sequence) -> str:
    return (
        "Based on the following documents, find the most relevant ones for this "
        f'query: "{query}"\n\nDocuments:\n{document_context(documents)}\n\n'
        "Return only the titles of the most relevant documents, separated by commas."
    )


def question_prompt(question: str, documents: Sequence) -> str:
    return (
        f'Based on the following documents, answer this question: "{question}"\n\n'
        f"Documents:\n{document_context(documents)}\n\n"
        "Provide a comprehensive answer using information from the documents. "
        "If the documents don't contain enough information to answer the "
        "question, say so."
    )


def insights_prompt(documents: Sequence) -> str:
    return (
        "Based on the following documents, provide 3-5 key insights about the "
        "knowledge base. Focus on patterns, themes, and important information:"
        f"\n\nDocuments:\n{document_context(documents)}\n\n"
        "Provide insights in bullet points."
    )


def related_documents_prompt(reference_text: str, documents: Sequence) -> str:
    titles = "\n".join(doc.title for doc in documents)
    return (
        f'Based on this user content: "{reference_text}"\n\n'
        "Find the most related documents from this list. Return only the titles "
        f"of the most relevant documents, separated by commas:\n\n{titles}"
    )
