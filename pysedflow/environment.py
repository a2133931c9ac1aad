"""
Environment initialization and management for PySedFlow.

Wraps the Taichi runtime initialisation so that applications (the live
viewer, scripts, the test-suite) bring the backend up exactly once.

Author: B.G.
"""

import taichi as ti

_INITIALISED = False


def initialise(arch=None, debug=False, **kwargs):
	"""
	Initialize the Taichi backend used by all PySedFlow kernels.

	Args:
		arch: Taichi architecture (ti.cpu, ti.gpu, ...). Default: ti.gpu, which
			falls back to CPU when no GPU backend is available
		debug (bool): Enable Taichi bound checks. Default: False
		**kwargs: Forwarded to ti.init

	Raises:
		RuntimeError: If already initialized

	Author: B.G.
	"""
	global _INITIALISED
	if(_INITIALISED):
		raise RuntimeError("PySedFlow already initialized")

	ti.init(arch=ti.gpu if arch is None else arch, debug=debug, **kwargs)
	_INITIALISED = True


def is_initialised():
	return _INITIALISED


def reboot():
	"""
	Reset the Taichi environment.

	Frees every field. Any Simulator created before is invalid afterwards.

	Author: B.G.
	"""
	global _INITIALISED
	ti.reset()
	_INITIALISED = False
