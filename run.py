#!/usr/bin/env python3
"""
Interactive water and soil transport sandbox.

    python run.py --nx 256 --ny 256 --arch gpu
"""
import argparse

import taichi as ti

import pysedflow as psf


def main():
	parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument("--nx", type=int, default=psf.constants.NX, help="grid columns")
	parser.add_argument("--ny", type=int, default=psf.constants.NY, help="grid rows")
	parser.add_argument("--arch", choices=["gpu", "cpu", "vulkan", "cuda", "metal"], default="gpu", help="Taichi backend")
	parser.add_argument("--paused", action="store_true", help="start paused")
	parser.add_argument("--verbose", action="store_true", help="print progress")
	args = parser.parse_args()

	psf.environment.initialise(arch=getattr(ti, args.arch))

	controls = psf.params.Controls(running=not args.paused)
	sim = psf.Simulator(args.nx, args.ny, controls=controls, verbose=args.verbose)
	psf.visu.LiveViewer(sim).run()


if __name__ == "__main__":
	main()
