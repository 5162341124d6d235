"""
IT Operations — Daily and Weekly Status Dashboard

Analytics backend that turns the published IT status spreadsheet (bins,
forklifts, gates, network routers, VMs, services, security screens) into
dashboard-ready values.

To swap the spreadsheet for another source:
    Replace loaders.load_all_sheets with any callable returning
    sheet name -> list of row dicts, and pass it to state.DashboardState.
    Reconciliation and metrics only see row dicts.

To connect a front end:
    Call dashboard.get_daily_overview(state.filtered) for the daily page and
    the dashboard.get_weekly_* functions with state.week() for the weekly page.

To tolerate a renamed column:
    Add the new header to the front of its entry in config.FIELD_ALIASES.
"""
