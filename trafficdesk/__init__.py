"""Traffic ticket desk: user directory and traffic ticket registry.

The FastAPI application lives in :mod:`trafficdesk.main`; importing this
package alone does not build it or touch the database.
"""

__version__ = "0.1.0"
