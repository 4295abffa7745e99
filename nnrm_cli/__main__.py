"""console script entrypoints for the nnrm CLI."""


def run(pkg_manager: str = "npm") -> int:
    from .cli import main as cli_main

    return cli_main(pkg_manager=pkg_manager)


def main() -> int:
    """Console entrypoint driving npm."""
    return run("npm")


def main_yarn() -> int:
    """Console entrypoint driving yarn."""
    return run("yarn")


if __name__ == "__main__":
    raise SystemExit(run())
