"""Command-line entry point for the Push variation engine.

Applies one variation operator to programs given as Push text and prints the
child. Useful for inspecting operator behaviour by hand.
"""

import argparse
import logging
import random
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)

OPERATORS = (
    "mutate",
    "crossover",
    "gsxover",
    "delete",
    "parens",
    "tag",
    "tag-branch",
    "gaussian",
    "ultra",
)

TWO_PARENT_OPERATORS = {"crossover", "gsxover", "ultra"}


def parse_atom_generators(atoms):
    from variation.program.text import parse_atom

    return [parse_atom(atom) for atom in atoms]


def parse_type_instruction_pairs(pairs):
    result = []
    for pair in pairs:
        type_name, sep, instruction = pair.partition("=")
        if not sep or not type_name or not instruction:
            raise ValueError(f"Expected TYPE=INSTRUCTION, got {pair!r}")
        result.append((type_name, instruction))
    return result


def run_operator(args) -> str:
    """Apply the requested operator and return the child's program text."""
    from variation.config.lineage import set_maintain_ancestors
    from variation.config.variation import VariationConfig
    from variation.evolution import (
        add_parentheses_mutate,
        boolean_gsxover,
        crossover,
        delete_mutate,
        gaussian_mutate,
        make_individual,
        mutate,
        tag_branch_insertion_mutate,
        tagging_mutate,
        ultra,
    )
    from variation.program import parse_program, program_to_text

    config = VariationConfig.from_env()
    max_points = args.max_points if args.max_points is not None else config.max_points
    rng = random.Random(args.seed)
    if args.maintain_ancestors:
        set_maintain_ancestors(True)

    atom_generators = parse_atom_generators(args.atoms)
    parent1 = make_individual(parse_program(args.program))
    parent2 = make_individual(parse_program(args.other)) if args.other else None

    if args.operator in TWO_PARENT_OPERATORS and parent2 is None:
        raise ValueError(f"{args.operator} needs a second program (--other)")
    if args.operator in {"mutate", "gsxover", "ultra"} and not atom_generators:
        raise ValueError(f"{args.operator} needs an atom vocabulary (--atoms)")

    if args.operator == "mutate":
        child = mutate(parent1, config.mutation_max_points, max_points, atom_generators, rng)
    elif args.operator == "crossover":
        child = crossover(parent1, parent2, max_points, rng)
    elif args.operator == "gsxover":
        child = boolean_gsxover(
            parent1, parent2, config.boolean_gsxover_new_code_max_points,
            max_points, atom_generators, rng,
        )
    elif args.operator == "delete":
        child = delete_mutate(parent1, max_points, rng)
    elif args.operator == "parens":
        child = add_parentheses_mutate(parent1, max_points, rng)
    elif args.operator == "tag":
        child = tagging_mutate(parent1, max_points, config.tag_limit, rng)
    elif args.operator == "tag-branch":
        pairs = parse_type_instruction_pairs(args.type_pairs) or list(
            config.tag_branch_type_instruction_pairs
        )
        if not pairs:
            raise ValueError("tag-branch needs at least one --type-pair TYPE=INSTRUCTION")
        child = tag_branch_insertion_mutate(parent1, max_points, pairs, config.tag_limit, rng)
    elif args.operator == "gaussian":
        child = gaussian_mutate(
            parent1,
            config.gaussian_mutation_per_number_mutation_probability,
            config.gaussian_mutation_standard_deviation,
            rng,
            max_points=max_points,
        )
    else:
        child = ultra(
            parent1, parent2, max_points,
            config.ultra_alternation_rate, config.ultra_alignment_deviation,
            config.ultra_mutation_rate, atom_generators, rng,
        )

    if child is parent1:
        logger.info("Child exceeded max_points=%d; parent returned unchanged", max_points)
    for depth, ancestor in enumerate(child.ancestors, start=1):
        logger.info("ancestor %d: %s", depth, program_to_text(ancestor))
    return program_to_text(child.program)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Push Variation Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Point mutation with a small vocabulary
  python main.py mutate "(integer_add 1 (exec_dup 2))" --atoms integer_add exec_dup 1 2

  # Subtree crossover, reproducible
  python main.py crossover "(a b (c d))" --other "(x (y z))" --seed 42

  # ULTRA with a custom size cap
  python main.py ultra "(a (b c) d)" --other "(1 2 (3))" --atoms a 1 --max-points 50

  # Tag-branch insertion
  python main.py tag-branch "(a b)" --type-pair integer=integer_eq
        """,
    )

    parser.add_argument("operator", choices=OPERATORS, help="Variation operator to apply")
    parser.add_argument("program", help="Parent program as Push text")
    parser.add_argument(
        "--other", type=str, default=None, help="Second parent program (two-parent operators)"
    )
    parser.add_argument(
        "--atoms",
        nargs="*",
        default=[],
        help="Atom vocabulary for operators that write new code",
    )
    parser.add_argument(
        "--type-pair",
        dest="type_pairs",
        action="append",
        default=[],
        help="TYPE=INSTRUCTION comparison pair for tag-branch (repeatable)",
    )
    parser.add_argument(
        "--max-points",
        type=int,
        default=None,
        help="Size cap for the child (default: PUSH_VARIATION_MAX_POINTS or 100)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--maintain-ancestors",
        action="store_true",
        help="Record the parent's program in the child's ancestor list",
    )
    return parser


def main(argv=None):
    """Parse command-line arguments and apply the requested operator."""
    parser = build_parser()
    args = parser.parse_args(argv)

    from variation.exceptions import VariationError

    try:
        print(run_operator(args))
    except (ValueError, VariationError) as e:
        logger.error("Error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
