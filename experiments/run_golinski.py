import argparse

from benchmarks.golinski import CONSTRAINTS, REFERENCE, SHAPE, golinski, violations
from swarm.pso import Optimizer
from experiments.run_opt import add_common_args, common_options, configure_logging, optimize


def main(argv=None):
    parser = argparse.ArgumentParser(description="Golinski speed reducer design by particle swarm")
    add_common_args(parser, pop=14000, local=25, wait=2.5)
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    options = common_options(args)
    options.update(bounds=SHAPE, constraints=CONSTRAINTS)
    opt = Optimizer(golinski, SHAPE, options)

    summary = optimize(opt, "golinski", progress_rate=args.rate, out=args.out, plot=args.plot)
    best = opt.best()
    print("Best:", best.tolist(), golinski(best))
    print("Violated:", violations(best) or "none")
    print("Reference:", REFERENCE.tolist(), golinski(REFERENCE))
    print(f"Steps: {summary['steps']} | Results: {summary['run_dir']}")
    return summary


if __name__ == "__main__":
    main()
