from crm.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- AUTH ----------------
    ActivityCode.LOGIN:
        "{actor_role} ({actor_email}) logged in",

    ActivityCode.LOGOUT:
        "{actor_role} ({actor_email}) logged out",

    # ---------------- USERS ----------------
    ActivityCode.CREATE_USER:
        "{actor_role} ({actor_email}) created user {target_email} with role {target_role}",

    # ---------------- QUOTATIONS ----------------
    ActivityCode.CREATE_QUOTATION:
        "{actor_role} ({actor_email}) requested quotation #{target_id} for {service}",

    ActivityCode.UPDATE_QUOTATION:
        "{actor_role} ({actor_email}) updated quotation #{target_id}: {changes}",

    ActivityCode.CHANGE_QUOTATION_STATUS:
        "{actor_role} ({actor_email}) changed quotation #{target_id} status "
        "from {old_status} to {new_status}",
}
