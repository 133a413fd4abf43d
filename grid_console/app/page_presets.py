from __future__ import annotations

from grid_console.app.grid_config import FacetDef, GridConfig, JobDef
from grid_console.app.query_state import SortDirection
from grid_console.app.ui.filters import DateRange
from grid_console.app.ui.forms import FieldDef, FieldKind
from grid_console.app.ui.listing_view import ColumnDef, ColumnKind

CONTESTS = GridConfig(
    table_id="contests",
    resource_path="/api/contests",
    title="Contests",
    columns=(
        ColumnDef("contest_date", "Date", ColumnKind.DATE),
        ColumnDef("contest_name", "Contest", width=240),
        ColumnDef("contest_place", "Place"),
        ColumnDef("is_ready", "Published", ColumnKind.BOOLEAN, sortable=False, width=80),
    ),
    default_sort="contest_date",
    facets=(FacetDef("places", filter_key="contest_place"),),
    filter_keys=("contest_place", "startDate", "endDate"),
    date_range=DateRange("startDate", "endDate"),
    flag_column="is_ready",
    fields=(
        FieldDef("contest_name", "Contest", required=True),
        FieldDef("contest_date", "Date", FieldKind.DATE, required=True),
        FieldDef("contest_place", "Place", required=True),
        FieldDef("is_ready", "Published", FieldKind.BOOLEAN, default=False),
    ),
    summary_keys=("contest_name", "contest_date", "contest_place"),
)

MEMBERS = GridConfig(
    table_id="members",
    resource_path="/api/members",
    title="Members",
    columns=(
        ColumnDef("shopify_id", "Shopify ID"),
        ColumnDef("email", "Email", width=200),
        ColumnDef("first_name", "First name"),
        ColumnDef("last_name", "Last name"),
        ColumnDef("phone", "Phone"),
        ColumnDef("city", "City"),
        ColumnDef("province", "Province"),
        ColumnDef("fwj_card_no", "FWJ card"),
        ColumnDef("fwj_firstname", "FWJ first name"),
        ColumnDef("fwj_lastname", "FWJ last name"),
        ColumnDef("fwj_kanafirstname", "FWJ first name (kana)"),
        ColumnDef("fwj_kanalastname", "FWJ last name (kana)"),
        ColumnDef("fwj_birthday", "Birthday", ColumnKind.DATE),
        ColumnDef("fwj_sex", "Sex"),
        ColumnDef("fwj_nationality", "Nationality"),
        ColumnDef("fwj_effectivedate", "Valid until", ColumnKind.DATE),
        ColumnDef("created_at", "Registered", ColumnKind.DATE),
    ),
    default_sort="created_at",
    jobs=(JobDef("sync", "sync", "Sync members from the shop"),),
    id_key="shopify_id",
    creatable=False,
    editable=False,
    deletable=False,
)

ORDERS = GridConfig(
    table_id="orders",
    resource_path="/api/orders",
    title="Orders",
    columns=(
        ColumnDef("order_no", "Order"),
        ColumnDef("order_date", "Ordered at", ColumnKind.DATETIME, width=150),
        ColumnDef("shopify_id", "Customer ID"),
        ColumnDef("full_name", "Customer"),
        ColumnDef("email", "Email", width=200),
        ColumnDef("total_price", "Total", ColumnKind.MONEY),
        ColumnDef("financial_status", "Payment"),
        ColumnDef("fulfillment_status", "Fulfillment"),
        ColumnDef("product_name", "Product", width=200),
        ColumnDef("variant", "Variant", sortable=False),
        ColumnDef("quantity", "Qty", width=60),
        ColumnDef("current_quantity", "Current qty", width=60),
        ColumnDef("price", "Unit price", ColumnKind.MONEY),
    ),
    default_sort="order_date",
    list_path="list",
    facets=(
        FacetDef(
            "filter-options",
            fields=(
                ("productNames", "product_name"),
                ("financialStatuses", "financial_status"),
                ("fulfillmentStatuses", "fulfillment_status"),
            ),
        ),
    ),
    filter_keys=("product_name", "financial_status", "fulfillment_status"),
    jobs=(JobDef("export", "export", "Export orders to the spreadsheet", reload_on_success=False),),
    creatable=False,
    editable=False,
    deletable=False,
)

TICKETS = GridConfig(
    table_id="tickets",
    resource_path="/api/tickets",
    title="Tickets",
    columns=(
        ColumnDef("is_usable", "Valid", ColumnKind.BOOLEAN, width=60),
        ColumnDef("order_no", "Order"),
        ColumnDef("order_date", "Ordered at", ColumnKind.DATETIME, width=150),
        ColumnDef("full_name", "Buyer"),
        ColumnDef("shopify_id", "Buyer ID"),
        ColumnDef("email", "Email", width=200),
        ColumnDef("product_name", "Product", width=200),
        ColumnDef("variant", "Variant", sortable=False),
        ColumnDef("color", "Color", sortable=False),
        ColumnDef("item_sub_no", "Sub no."),
        ColumnDef("price", "Unit price", ColumnKind.MONEY),
        ColumnDef("financial_status", "Payment"),
        ColumnDef("owner_shopify_id", "Owner ID"),
        ColumnDef("reserved_seat", "Seat"),
        ColumnDef("used_at", "Used at", ColumnKind.DATETIME, width=150),
    ),
    default_sort="order_date",
    new_column_direction=SortDirection.DESC,
    facets=(
        FacetDef(
            "filter-options",
            fields=(("productNames", "product_name"), ("financialStatuses", "financial_status")),
        ),
    ),
    filter_keys=("product_name", "financial_status", "shopify_id_filter", "valid_only"),
    flag_column="is_usable",
    jobs=(JobDef("import", "import", "Import tickets from orders"),),
    fields=(
        FieldDef("is_usable", "Valid", FieldKind.BOOLEAN),
        FieldDef("owner_shopify_id", "Owner ID"),
        FieldDef("reserved_seat", "Seat"),
    ),
    summary_keys=("order_no", "full_name", "product_name"),
    creatable=False,
)

SUBJECTS = GridConfig(
    table_id="subjects",
    resource_path="/api/subjects",
    title="Certified subjects",
    columns=(
        ColumnDef("fwj_card_no", "FWJ card"),
        ColumnDef("name_ja", "Name (ja)"),
        ColumnDef("first_name", "First name"),
        ColumnDef("last_name", "Last name"),
        ColumnDef("npc_member_no", "NPC member"),
        ColumnDef("note", "Note", sortable=False, width=240),
    ),
    default_sort="fwj_card_no",
    default_direction=SortDirection.ASC,
    server_side=False,
    soft_delete=True,
    fields=(
        FieldDef("fwj_card_no", "FWJ card", required=True),
        FieldDef("name_ja", "Name (ja)"),
        FieldDef("first_name", "First name"),
        FieldDef("last_name", "Last name"),
        FieldDef("npc_member_no", "NPC member"),
        FieldDef("note", "Note"),
    ),
    summary_keys=("fwj_card_no", "name_ja"),
    admin_only=True,
)

USERS = GridConfig(
    table_id="users",
    resource_path="/api/users",
    title="Users",
    columns=(
        ColumnDef("name", "Name"),
        ColumnDef("email", "Email", width=200),
        ColumnDef("role", "Role", width=80),
        ColumnDef("createdAt", "Created", ColumnKind.DATE),
    ),
    default_sort="createdAt",
    server_side=False,
    soft_delete=True,
    fields=(
        FieldDef("name", "Name", required=True),
        FieldDef("email", "Email", required=True),
        FieldDef("role", "Role", FieldKind.CHOICE, choices=("user", "admin"), default="user"),
        FieldDef("password", "Password", required=True, required_on_edit=False, omit_when_blank=True),
    ),
    summary_keys=("name", "email"),
)

GUESTS = GridConfig(
    table_id="guests",
    resource_path="/api/guests",
    title="Guests",
    columns=(
        ColumnDef("大会名", "Contest", width=200),
        ColumnDef("団体/個人", "Group / individual"),
        ColumnDef("付与パス", "Pass"),
        ColumnDef("代表者氏名", "Representative"),
        ColumnDef("団体名（企業名）", "Organization", width=200),
        ColumnDef("連絡先メールアドレス", "Email", width=200),
        ColumnDef("緊急電話番号", "Emergency phone"),
        ColumnDef("社内担当者名", "Staff contact"),
        ColumnDef("申請種別", "Application"),
        ColumnDef("合計付与枚数", "Passes", width=60),
        ColumnDef("事前案内メール", "Invite sent", ColumnKind.BOOLEAN, width=80),
        ColumnDef("Check-In", "Check-in", ColumnKind.BOOLEAN, width=80),
        ColumnDef("開催後メール", "Follow-up sent", ColumnKind.BOOLEAN, width=80),
        ColumnDef("備考欄（同伴者氏名など）", "Remarks", sortable=False, width=240),
    ),
    default_sort="大会名",
    default_direction=SortDirection.ASC,
    facets=(
        FacetDef(
            "filter-options",
            fields=(
                ("contestNames", "contest_name"),
                ("organizationTypes", "organization_type"),
                ("passTypes", "pass_type"),
            ),
        ),
    ),
    filter_keys=("contest_name", "organization_type", "pass_type", "representative_name", "organization_name"),
    flag_column="Check-In",
    fields=(
        FieldDef("Check-In", "Check-in", FieldKind.BOOLEAN),
        FieldDef("備考欄（同伴者氏名など）", "Remarks"),
    ),
    summary_keys=("大会名", "代表者氏名", "団体名（企業名）"),
    creatable=False,
)

NOTES = GridConfig(
    table_id="notes",
    resource_path="/api/notes",
    title="Notes",
    columns=(
        ColumnDef("contest_date", "Date", ColumnKind.DATE),
        ColumnDef("contest_name", "Contest", width=200),
        ColumnDef("name_ja", "Name (ja)"),
        ColumnDef("type", "Type"),
        ColumnDef("player_no", "Player no.", width=80),
        ColumnDef("fwj_card_no", "FWJ card"),
        ColumnDef("npc_member_no", "NPC member"),
        ColumnDef("note", "Note", sortable=False, width=240),
    ),
    default_sort="contest_date",
    facets=(FacetDef("filter-options", fields=(("contestNames", "contest_name"), ("types", "type"))),),
    filter_keys=("fwj_card_no", "contest_name", "type", "startDate", "endDate"),
    date_range=DateRange("startDate", "endDate"),
    soft_delete=True,
    fields=(
        FieldDef("contest_date", "Date", FieldKind.DATE, required=True),
        FieldDef("contest_name", "Contest", required=True),
        FieldDef("name_ja", "Name (ja)"),
        FieldDef("type", "Type", required=True),
        FieldDef("player_no", "Player no."),
        FieldDef("fwj_card_no", "FWJ card"),
        FieldDef("npc_member_no", "NPC member"),
        FieldDef("note", "Note"),
    ),
    summary_keys=("contest_name", "name_ja", "type"),
)

REGISTRATIONS = GridConfig(
    table_id="registrations",
    resource_path="/api/registrations",
    title="Registrations",
    columns=(
        ColumnDef("contest_date", "Date", ColumnKind.DATE),
        ColumnDef("contest_name", "Contest", width=200),
        ColumnDef("player_no", "Player no.", width=80),
        ColumnDef("name_ja", "Name (ja)"),
        ColumnDef("name_ja_kana", "Name (kana)"),
        ColumnDef("first_name", "First name"),
        ColumnDef("last_name", "Last name"),
        ColumnDef("email", "Email", width=200),
        ColumnDef("phone", "Phone"),
        ColumnDef("fwj_card_no", "FWJ card"),
        ColumnDef("country", "Country"),
        ColumnDef("age", "Age", width=60),
        ColumnDef("class_name", "Class", width=200),
        ColumnDef("sort_index", "Sort index", width=80),
        ColumnDef("score_card", "Score card"),
        ColumnDef("contest_order", "Contest order", width=80),
        ColumnDef("height", "Height", width=60),
        ColumnDef("weight", "Weight", width=60),
        ColumnDef("occupation", "Occupation"),
        ColumnDef("instagram", "Instagram"),
        ColumnDef("biography", "Biography", sortable=False, width=240),
    ),
    default_sort="contest_date",
    facets=(FacetDef("filter-options", fields=(("contestNames", "contest_name"), ("classNames", "class_name"))),),
    filter_keys=("fwj_card_no", "contest_name", "class_name", "startDate", "endDate"),
    date_range=DateRange("startDate", "endDate"),
    soft_delete=True,
    fields=(
        FieldDef("contest_date", "Date", FieldKind.DATE, required=True),
        FieldDef("contest_name", "Contest", required=True),
        FieldDef("player_no", "Player no."),
        FieldDef("name_ja", "Name (ja)"),
        FieldDef("name_ja_kana", "Name (kana)"),
        FieldDef("first_name", "First name"),
        FieldDef("last_name", "Last name"),
        FieldDef("email", "Email"),
        FieldDef("phone", "Phone"),
        FieldDef("fwj_card_no", "FWJ card"),
        FieldDef("class_name", "Class"),
    ),
    summary_keys=("contest_name", "player_no", "name_ja"),
)

SCORES = GridConfig(
    table_id="scores",
    resource_path="/api/scores",
    title="Scores",
    columns=(
        ColumnDef("npcj_no", "NPCJ no."),
        ColumnDef("contest_date", "Date", ColumnKind.DATE),
        ColumnDef("contest_name", "Contest", width=200),
        ColumnDef("category_name", "Category", width=200),
        ColumnDef("placing", "Placing", width=60),
        ColumnDef("player_name", "Player"),
        ColumnDef("contest_place", "Place"),
    ),
    default_sort="contest_date",
    facets=(
        FacetDef("filter-options", fields=(("contestNames", "contest_name"), ("categoryNames", "category_name"))),
    ),
    filter_keys=("fwj_no", "contest_name", "category_name", "startDate", "endDate"),
    date_range=DateRange("startDate", "endDate"),
    soft_delete=True,
    fields=(
        FieldDef("npcj_no", "NPCJ no.", required=True),
        FieldDef("contest_date", "Date", FieldKind.DATE, required=True),
        FieldDef("contest_name", "Contest", required=True),
        FieldDef("category_name", "Category", required=True),
        FieldDef("placing", "Placing"),
        FieldDef("player_name", "Player"),
        FieldDef("contest_place", "Place"),
    ),
    summary_keys=("npcj_no", "contest_name", "category_name"),
)

PRESETS: dict[str, GridConfig] = {
    config.table_id: config
    for config in (CONTESTS, MEMBERS, ORDERS, TICKETS, SUBJECTS, USERS, GUESTS, NOTES, REGISTRATIONS, SCORES)
}


def get_preset(name: str) -> GridConfig:
    try:
        return PRESETS[name]
    except KeyError as exc:
        raise KeyError(f"unknown page {name!r}; expected one of: {', '.join(sorted(PRESETS))}") from exc
