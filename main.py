"""Entry point delegating to the GRASP pipeline CLI."""

from grasp_toptw.glue.pipeline import main as pipeline_main


def main() -> None:
    pipeline_main()


if __name__ == "__main__":
    main()
