DEFAULT_SETTINGS = {
    'csv_path': '../data/intraday.csv',
    'delimiter': ',',
    'window_halfwidth': 2,
    'show_progress': False,
    'verbose': False,
}


def merge_settings(settings=None):
    """
    Overlays user settings on DEFAULT_SETTINGS.

    Parameters
    ----------
    settings : dict, optional
        Values to override. Keys that DEFAULT_SETTINGS does not know are
        dropped with a warning; None values keep the default.

    Returns
    -------
    dict
        A new dict holding every key of DEFAULT_SETTINGS.
    """
    merged = dict(DEFAULT_SETTINGS)
    if settings is None:
        return merged
    unknown = sorted(k for k in settings if k not in DEFAULT_SETTINGS)
    if len(unknown) > 0:
        print(f"WARNING: ignoring unknown settings {', '.join(unknown)}.")
    merged.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS and v is not None})
    return merged


def local_window(fenwick, center, halfwidth):
    """
    Returns [(i, value_i), ...] for the positions center-halfwidth .. center+halfwidth
    clipped to [1, n]. Empty when the tree has no positions.
    """
    n = fenwick.size()
    if n <= 0:
        return []
    L = max(center - halfwidth, 1)
    R = min(center + halfwidth, n)
    return [(i, fenwick.prefix_sum(i) - fenwick.prefix_sum(i - 1)) for i in range(L, R + 1)]
