from fastapi import APIRouter, HTTPException, Response

from mortgage_roi.models.comparison import ComparisonRequest, ComparisonResult
from mortgage_roi.services.comparison_service import run_comparison
from mortgage_roi.services.schedule_export import export_schedule_xlsx

router = APIRouter(tags=["comparison"])

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.post("/comparisons/run", response_model=ComparisonResult)
def run_comparison_endpoint(request: ComparisonRequest):
    """Solve both loan options and project investing the payment difference.

    Options that cannot be solved are reported in ``options[i].error`` and
    the schedule is omitted.
    """
    return run_comparison(request)


@router.post("/comparisons/export")
def export_comparison_endpoint(request: ComparisonRequest):
    """Return the monthly schedule as an Excel workbook."""
    result = run_comparison(request)
    if result.schedule is None:
        errors = [
            f"{option.label or f'Option {i + 1}'}: {option.error.error_message}"
            for i, option in enumerate(result.options)
            if option.error is not None
        ]
        raise HTTPException(status_code=400, detail="; ".join(errors))

    label_a, label_b = (option.label for option in result.options)
    content = export_schedule_xlsx(result.schedule, label_a, label_b)
    return Response(
        content=content,
        media_type=_XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="schedule.xlsx"'},
    )
