import argparse

from benchmarks.iris_nn import N_WEIGHTS, accuracy, make_fitness
from swarm.base import Range
from swarm.pso import Optimizer
from utils.iris_data import load_split
from experiments.run_opt import add_common_args, common_options, configure_logging, optimize


def main(argv=None):
    parser = argparse.ArgumentParser(description="Train an Iris classifier by particle swarm")
    add_common_args(parser, pop=2 * N_WEIGHTS, local=2, wait=2.5)
    parser.add_argument("--spread", type=float, default=10.0, help="Initial weights drawn from [-spread, spread]")
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    data = load_split()
    shape = [Range(-args.spread, args.spread)] * N_WEIGHTS
    opt = Optimizer(make_fitness(data.X_train, data.y_train), shape, common_options(args))

    summary = optimize(opt, "iris", progress_rate=args.rate, out=args.out, plot=args.plot)
    best = opt.best()
    train_acc = accuracy(best, data.X_train, data.y_train)
    test_acc = accuracy(best, data.X_test, data.y_test)
    print(f"Train accuracy: {train_acc:.3f} | Test accuracy: {test_acc:.3f}")
    print(f"Steps: {summary['steps']} | Results: {summary['run_dir']}")
    summary.update(train_accuracy=train_acc, test_accuracy=test_acc)
    return summary


if __name__ == "__main__":
    main()
