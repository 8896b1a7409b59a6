"""Texts of the messages pushed to users."""


def event_created(*, organizer_name, event_name, amount):
    return (
        "[Split request]\n"
        f"{organizer_name} created a shared expense.\n\n"
        f"Event: {event_name}\n"
        f"Your share: {amount:,}\n"
        f"Pay to: {organizer_name}\n\n"
        "Report your payment once it is done."
    )


def payment_approved(*, organizer_name, event_name, amount):
    return (
        "[Payment approved]\n"
        f"{organizer_name} approved your payment.\n\n"
        f"Event: {event_name}\n"
        f"Amount: {amount:,}\n\n"
        "Thank you!"
    )


def event_completed(*, event_name, participant_count):
    return (
        "[Event completed]\n"
        f"All {participant_count} payments for {event_name} are approved."
    )


def payment_reminder(*, event_name, amount):
    return (
        "[Payment reminder]\n\n"
        f"Event: {event_name}\n"
        f"Amount: {amount:,}\n\n"
        "We have not received your payment report yet. "
        "If you already paid, please report it."
    )
