summary_system_template = (
    "You are a highly skilled AI trained in language comprehension and summarization. "
    "I would like you to read the following transcript from a youtube video and summarize it "
    "into a concise abstract paragraph. Aim to retain the most important points, providing a "
    "coherent and readable summary that could help a person understand the main points of the "
    "video without needing to read the entire text. Please avoid unnecessary details or "
    "tangential points. The output should only be in English language."
)

video_context_template = 'The video is titled "{title}" and was published by {author}.'


def summary_system_prompt(video_title: str = "", video_author: str = "") -> str:
    """System instruction for summarizing one video's transcript."""
    if not video_title:
        return summary_system_template
    context = video_context_template.format(title=video_title, author=video_author or "an unknown author")
    return f"{summary_system_template}\n\n{context}"
