from dataclasses import dataclass


@dataclass(frozen=True)
class SearchSelectors:
    search_input: str
    results_container: str  # element id
    result_heading: str

    def results_container_query(self) -> str:
        return f"#{self.results_container.lstrip('#')}"

    def result_heading_query(self) -> str:
        """CSS query matching result headings inside the results container."""
        return f"{self.results_container_query()} {self.result_heading}"


def site_selectors() -> SearchSelectors:
    # Google results page markup; the site may change it at any time.
    return SearchSelectors(
        search_input="textarea[name='q']",
        results_container="search",
        result_heading="h3",
    )
