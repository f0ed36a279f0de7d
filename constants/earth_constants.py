import numpy as np
import pandas as pd


class EarthConstants:
    # Earth rotation rate in rad/s
    OMEGA_E_RAD_PER_SEC = 7.2921151467e-5

    # Earth rotation rate vector in rad/s
    OMEGA_IEE_VEC = np.array([0.0, 0.0, OMEGA_E_RAD_PER_SEC])

    # Sidereal day in seconds (one full turn at OMEGA_E_RAD_PER_SEC)
    SIDEREAL_DAY_S = 2.0 * np.pi / OMEGA_E_RAD_PER_SEC


class SiderealConstants:
    # J2000.0 reference epoch (2000-01-01 12:00:00 UTC)
    J2000_EPOCH_UTC = pd.Timestamp("2000-01-01T12:00:00", tz="UTC")

    # J2000.0 reference epoch in POSIX seconds
    J2000_EPOCH_POSIX_S = 946728000.0

    # Greenwich mean sidereal angle at J2000.0 in radians (280.46061837 deg)
    GMST_AT_J2000_RAD = np.deg2rad(280.46061837)
