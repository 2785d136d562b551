from __future__ import annotations

import argparse
import logging
import mimetypes
from pathlib import Path

from dotenv import load_dotenv

from relay.config import RelaySettings
from relay.graph import initial_state, pipeline
from relay.state import UploadedPayload

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """
    Run one image through the relay against the configured Dify app.

    Settings come from the environment or a `.env` file in the working
    directory.
    """
    parser = argparse.ArgumentParser(description="Stream one image through the relay graph.")
    parser.add_argument("image", nargs="?", default="test.jpg", help="path to a local image")
    args = parser.parse_args()

    load_dotenv()
    image = Path(args.image)
    payload = UploadedPayload(
        content=image.read_bytes(),
        filename=image.name,
        content_type=mimetypes.guess_type(image.name)[0],
    )

    # Stream: see each node's state delta live
    for step in pipeline.stream(initial_state(RelaySettings.from_env(), [payload])):
        node = list(step.keys())[0]
        delta = {k: v for k, v in step[node].items() if k != "payloads"}
        print("\n" + "=" * 40)
        print(f"NODE: {node}")
        print(f"DELTA: {delta}")


if __name__ == "__main__":
    main()
