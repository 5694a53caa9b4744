import argparse

from app.batch import BatchRunner, parse_url_list
from app.config import settings
from app.export import save_csv
from app.generator import OpenAIMetaTagGenerator
from app.logger import setup_logging
from app.reader import ReaderClient


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate German meta titles and descriptions for a list of URLs.")
    parser.add_argument("--input", required=True, help="Text file with one URL per line.")
    parser.add_argument(
        "--output",
        default=settings.export_filename,
        help="Output path for the CSV export.",
    )
    parser.add_argument("--title-example", default=None, help="Example meta title to steer the style.")
    parser.add_argument("--description-example", default=None, help="Example meta description to steer the style.")
    args = parser.parse_args()

    setup_logging()
    with open(args.input, encoding="utf-8") as f:
        urls = parse_url_list(f.read())

    runner = BatchRunner(ReaderClient(settings), OpenAIMetaTagGenerator(settings), settings)
    outcome = runner.run(urls, args.title_example, args.description_example)
    path = save_csv(outcome.results, args.output)
    print(outcome.message)
    print(f"Saved {len(outcome.results)} rows to {path}")


if __name__ == "__main__":
    main()
