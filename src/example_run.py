from src.search import SearchPipeline
from src.web import SessionConfig, build_session_factory


def main() -> None:
    config = SessionConfig.from_env()
    pipeline = SearchPipeline(
        build_session_factory(config),
        deadline_seconds=config.deadline_seconds,
    )
    pipeline.run("test")


if __name__ == "__main__":
    main()
