from io import BytesIO
from typing import Dict, List, Optional
from fastapi.responses import StreamingResponse
import pandas as pd

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def build_export_frame(data: List[Dict], column_map: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """
    Build a DataFrame from a list of row dicts.

    Args:
        data: List of dictionaries (each dict = row)
        column_map: Mapping of data keys -> friendly column names, also
            fixing the column order
    """
    if not column_map:
        return pd.DataFrame(data)

    # Fill missing keys to avoid KeyError
    rows = [{key: row.get(key) for key in column_map} for row in data]
    df = pd.DataFrame(rows, columns=list(column_map.keys()))
    return df.rename(columns=column_map)


def export_to_excel(
    data: List[Dict],
    filename: str = "export.xlsx",
    column_map: Optional[Dict[str, str]] = None,
    sheet_name: str = "Data",
) -> StreamingResponse:
    df = build_export_frame(data, column_map)

    # Create Excel in-memory
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)

    output.seek(0)

    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"'
    }

    return StreamingResponse(output, media_type=XLSX_MEDIA_TYPE, headers=headers)
