from app.schemas import MetaTagDraft


class FakeReader:
    """Maps URLs to page text, or to an exception to raise."""

    def __init__(self, pages: dict):
        self.pages = pages
        self.calls: list[str] = []

    def extract(self, url: str):
        self.calls.append(url)
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        return page


class FakeGenerator:
    def __init__(self, title: str = "", description: str = "", error: Exception | None = None, errors: dict | None = None):
        self.title = title or "Höhentraining und Wellness in München entdecken jetzt"
        self.description = description or (
            "Erleben Sie Höhentraining und Wellness in München: moderne Ausstattung, "
            "erfahrene Trainer und entspannende Angebote für Körper und Geist. Jetzt buchen!"
        )
        self.error = error
        self.errors = errors or {}
        self.calls: list[dict] = []

    def generate(self, text, title_example=None, description_example=None):
        self.calls.append({
            "text": text,
            "title_example": title_example,
            "description_example": description_example,
        })
        if self.error is not None:
            raise self.error
        if text in self.errors:
            raise self.errors[text]
        return MetaTagDraft(title=self.title, description=self.description)
