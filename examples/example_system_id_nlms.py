#################################################################################
#                        Example: System Identification                         #
#################################################################################
#                                                                               #
#  In this example we identify an unknown FIR system Wo with an NLMS engine     #
# running sample by sample. The procedure is:                                   #
# 1)  Draw the unknown weights Wo (30 taps) uniformly on (-1,1).                #
# 2)  Excitate both filters (the unknown and the adaptive) with white noise     #
#   uniform on (-1,1). No measurement noise is added, so the adaptive filter    #
#   should reach the floating point floor.                                      #
# 3)  Track the squared error and the misalignment ||Wo - w||^2 / ||Wo||^2      #
#   in dB at every iteration and compare the final values against -290 dB.     #
#                                                                               #
#     Adaptive Algorithm used here: NLMS (desired signal input)                 #
#                                                                               #
#################################################################################

# Imports
import argparse

from pydaptivenlms import ProgressConfig, SystemIDConfig, run_system_identification


def run_nlms_system_identification(print_every: int = 500, plot: bool = False):
    """
    Example: System Identification using the NLMS engine.
    """
    # 1. Experiment Parameters
    cfg = SystemIDConfig()
    progress = ProgressConfig(verbose_progress=True, print_every=print_every)

    print("-" * 50)
    print(f"Starting NLMS Adaptation (Taps: {cfg.n_taps}, StepSize: {cfg.step_size})...")

    # 2. Run
    report = run_system_identification(cfg, progress)

    print(f"Adaptation Finished in {report.runtime_ms:.03f} ms")
    print("-" * 50)
    print(f"Final Misalignment = {report.final_misalignment_db:.2f} dB")
    print(f"Final Squared Error = {report.final_squared_error_db:.2f} dB")

    # 3. Graphical Visualization
    if plot:
        from pydaptivenlms._utils.plotting import plot_system_id_results
        plot_system_id_results(report)

    return report


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="NLMS system identification example")
    parser.add_argument("--print-every", type=int, default=500,
                        help="print metrics every N iterations (1 = every iteration)")
    parser.add_argument("--plot", action="store_true", help="show weights and learning curves")
    args = parser.parse_args()

    report = run_nlms_system_identification(print_every=args.print_every, plot=args.plot)
    raise SystemExit(0 if report.passed else 1)
