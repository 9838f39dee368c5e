"""Profile and settings CLI commands for Payout Calc.

profile.yaml holds the user's financial details; settings.json holds
machine-specific preferences.
"""

import click

from payoutcalc.sdk import (
    ProfileInvalidError,
    ProfileNotFoundError,
    get_data_path,
    get_pan_holder_type,
    get_profile_path,
    get_settings_path,
    get_state_from_gstin,
    load_financial_profile,
    load_profile,
    load_settings,
    save_profile,
    set_setting,
    validate_financial_profile,
)


@click.group()
def profile():
    """Manage the financial profile (profile.yaml)."""
    pass


@profile.command("show")
def profile_show():
    """Show the financial profile and whether it is complete."""
    try:
        financial = load_financial_profile(require_exists=True)
    except (ProfileNotFoundError, ProfileInvalidError) as e:
        raise click.ClickException(str(e))

    click.echo(f"Profile: {get_profile_path()}")
    if financial is None:
        click.echo("No 'financial' section configured.")
        return

    click.echo(f"  PAN:            {financial.pan_number or '-'}"
               + (f" ({get_pan_holder_type(financial.pan_number)})" if financial.pan_number else ""))
    click.echo(f"  GSTIN:          {financial.gstin_number or '-'}"
               + (f" ({get_state_from_gstin(financial.gstin_number)})" if financial.gstin_number else ""))
    click.echo(f"  GST registered: {'yes' if financial.is_gst_registered else 'no'}")
    click.echo(f"  TDS deductor:   {'yes' if financial.is_tds_deductor else 'no'}")

    result = validate_financial_profile(
        financial.pan_number, financial.gstin_number, financial.is_gst_registered
    )
    click.echo()
    if result.valid:
        click.echo(click.style("Ready: profile is complete", fg="green"))
    else:
        click.echo(click.style("Not ready:", fg="red"))
        for field, error in result.errors.items():
            click.echo(f"  {field}: {error}")


@profile.command("set")
@click.option("--pan", "pan_number", help="PAN number")
@click.option("--gstin", "gstin_number", help="GSTIN (empty string to clear)")
@click.option("--gst/--no-gst", "is_gst_registered", default=None, help="GST registered")
@click.option("--deductor/--non-deductor", "is_tds_deductor", default=None,
              help="Deducts TDS when paying as a client")
def profile_set(pan_number, gstin_number, is_gst_registered, is_tds_deductor):
    """Update fields in the financial profile.

    Values are stored as given; run 'payout-calc validate profile' to check them.
    """
    data = load_profile(require_exists=False)
    financial = dict(data.get("financial") or {})

    updates = {
        "pan_number": pan_number.strip().upper() if pan_number else None,
        "gstin_number": gstin_number.strip().upper() if gstin_number else gstin_number,
        "is_gst_registered": is_gst_registered,
        "is_tds_deductor": is_tds_deductor,
    }
    for key, value in updates.items():
        if value is None:
            continue
        if value == "":
            financial.pop(key, None)
        else:
            financial[key] = value

    data["financial"] = financial
    path = save_profile(data)
    click.echo(f"Saved: {path}")


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - data_dir: custom data directory path (ledger storage)
    - profile: path to profile.yaml
    - default_output_format: text or json
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    click.echo(f"  data_dir: {get_data_path()}")
    click.echo(f"  profile: {get_profile_path()}")


@settings.command("set")
@click.argument("key", type=click.Choice(["data_dir", "profile", "default_output_format"]))
@click.argument("value")
def settings_set(key, value):
    """Set a setting KEY to VALUE."""
    if key == "default_output_format" and value not in ("text", "json"):
        raise click.BadParameter("must be 'text' or 'json'", param_hint="VALUE")
    path = set_setting(key, value)
    click.echo(f"Set {key} = {value} ({path})")
