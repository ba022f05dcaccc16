"""catlog tree - show the configured category hierarchy."""


def register(subparsers, parents):
    """Register the 'tree' subcommand."""
    p = subparsers.add_parser(
        "tree",
        help="Show the category tree from config and --category flags",
    )
    p.set_defaults(func=run)


def run(args):
    """Execute the tree command."""
    logger = args.logger
    print(logger.format_tree())
    if logger.default_category is not None:
        print(f"Default category: {logger.default_category}")
    if logger.category_format is not None:
        print(f"Label format: {logger.category_format!r}")
    return 0
