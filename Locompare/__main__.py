import argparse
import sys
import logging
from Locompare.version import __version__


def main(call_args=None):

    """
    Main launcher function for the program.
    :param call_args: optional argument string to be passed to execute the commands.
    Otherwise, the string will be derived from sys.argv[1:]
    """

    if call_args is None:
        call_args = sys.argv[1:]
    from Locompare.subprograms import configure, compare, loci

    parser = argparse.ArgumentParser(prog="Locompare",
                                     description="""Locompare clusters gene annotations into loci
and compares the gene models of a prediction against those of a reference.""")

    parser.add_argument("--version", default=False, action="store_true",
                        help="Print Locompare current version and exit.")

    subparsers = parser.add_subparsers(
        title="Components",
        help="""These are the various components of Locompare:

""")
    subparsers.add_parser("configure", help="This utility creates a configuration file for Locompare.")
    subparsers.choices["configure"] = configure.configure_parser()
    subparsers.choices["configure"].prog = "Locompare configure"

    subparsers.add_parser("compare", help="Locompare compare clusters a reference and a prediction \
annotation into loci and reports how well the predicted gene models match the reference ones.")
    subparsers.choices["compare"] = compare.compare_parser()
    subparsers.choices["compare"].prog = "Locompare compare"

    subparsers.add_parser("loci", help="Locompare loci clusters the genes of a single annotation into loci.")
    subparsers.choices["loci"] = loci.loci_parser()
    subparsers.choices["loci"].prog = "Locompare loci"

    try:
        args = parser.parse_args(call_args)
        if hasattr(args, "func"):
            args.func(args)
        elif args.version is True:
            print("Locompare v{}".format(__version__))
            sys.exit(0)
        else:
            parser.print_help()
    except KeyboardInterrupt:
        raise KeyboardInterrupt
    except BrokenPipeError:
        pass
    except Exception as exc:
        logger = logging.getLogger("main")
        logger.error("Locompare crashed, cause:")
        logger.exception(exc)
        sys.exit(1)


if __name__ == '__main__':
    sys.exit(main())
