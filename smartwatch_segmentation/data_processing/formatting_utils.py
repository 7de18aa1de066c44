import re


def safe_filename(name: str) -> str:
    """Sanitize a string to be safe for use as a filename."""
    name = str(name)
    name = re.sub(r'[\\/:*?"<>|]', '_', name)
    name = re.sub(r'\s+', '_', name)
    name = re.sub(r'_+', '_', name)
    return name.strip('_')


def safe_sheet_name(name: str) -> str:
    # Excel sheet names: <= 31 chars, no []:*?/\
    return re.sub(r'[\[\]:*?/\\]', '_', str(name))[:31]


def write_excel_with_number_format(
    df,
    path,
    sheet_name="Sheet1",
    index=False,
    number_format="0.00",
    format_cols=None,
):
    """Write df to a single-sheet workbook, applying number_format to format_cols."""
    import pandas as pd

    if format_cols is None:
        format_cols = []
    sheet_name = safe_sheet_name(sheet_name)

    with pd.ExcelWriter(path, engine="xlsxwriter") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=index)
        workbook = writer.book
        worksheet = writer.sheets[sheet_name]

        cell_format = workbook.add_format({"num_format": number_format})
        offset = 1 if index else 0
        for col_name in format_cols:
            if col_name in df.columns:
                col_idx = df.columns.get_loc(col_name) + offset
                worksheet.set_column(col_idx, col_idx, 14, cell_format)
