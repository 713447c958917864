"""
FastAPI REST API for DummyForge

Provides endpoints for:
- Field type and country catalogues
- Record generation
- Export to SQL, CSV, TXT, fixed-width text, XLSX and PDF
- Request presets
"""

from fastapi import FastAPI, HTTPException, Header
from fastapi.responses import StreamingResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
import io
from datetime import datetime
import logging
import os

from dummyforge.config import ConfigLoader, EngineSettings, generation_config_to_dict
from dummyforge.countries import get_calling_code, list_countries
from dummyforge.engine import DataGenerator
from dummyforge.errors import DummyForgeError, ErrorKind
from dummyforge.exporters import EXTENSIONS, MEDIA_TYPES, Exporter
from dummyforge.field_types import FIELD_CATEGORIES
from dummyforge.utils import PathManager, setup_logging

# Configure logging
setup_logging(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="DummyForge API",
    description="Generate synthetic tabular records from declarative field configurations",
    version="1.0.0"
)

# CORS middleware
allowed_origins = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

config_loader = ConfigLoader()

SERVER_ERROR_KINDS = {ErrorKind.ENGINE_FAILURE, ErrorKind.EXPORT_FAILED}


def require_api_key(x_api_key: Optional[str] = Header(default=None)):
    expected = os.getenv("API_KEY")
    if expected and x_api_key != expected:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


def http_error(error: DummyForgeError) -> HTTPException:
    """Map a typed error to an HTTP status with its serialized body"""
    if error.kind == ErrorKind.UNIQUENESS_EXHAUSTED:
        status_code = 422
    elif error.kind in SERVER_ERROR_KINDS:
        status_code = 500
    else:
        status_code = 400
    return HTTPException(status_code=status_code, detail=error.to_dict())


# Pydantic models
class WireModel(BaseModel):
    """Accepts camelCase aliases and snake_case names"""
    model_config = ConfigDict(populate_by_name=True)


class AgeConfigModel(WireModel):
    mode: str = Field("between", description="between, under, above or exact")
    min: Optional[int] = 18
    max: Optional[int] = 65
    value: Optional[int] = None


class DemographicsModel(WireModel):
    male_percentage: float = Field(50, alias="malePercentage")
    female_percentage: float = Field(50, alias="femalePercentage")
    age_config: AgeConfigModel = Field(default_factory=AgeConfigModel, alias="ageConfig")


class LocationModel(WireModel):
    mode: str = Field("random", description="random, specific or single")
    countries: List[str] = Field(default_factory=list)
    single_country: Optional[str] = Field(None, alias="singleCountry")


class FieldOptionsModel(WireModel):
    length_min: Optional[int] = Field(None, alias="lengthMin")
    length_max: Optional[int] = Field(None, alias="lengthMax")
    number_min: Optional[float] = Field(None, alias="numberMin")
    number_max: Optional[float] = Field(None, alias="numberMax")
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    start: Optional[int] = None
    step: Optional[int] = None
    pattern: Optional[str] = None
    date_format: Optional[str] = Field(None, alias="dateFormat")
    boolean_true_percentage: Optional[float] = Field(None, alias="booleanTruePercentage")


class FieldModel(WireModel):
    name: str
    type: str
    unique: bool = False
    config: Optional[FieldOptionsModel] = None


class GenerationRequest(WireModel):
    """Generation request"""
    fields: List[FieldModel] = Field(default_factory=list)
    count: int = Field(100, description="Number of records to generate (1-10000)")
    demographics: DemographicsModel = Field(default_factory=DemographicsModel)
    location: LocationModel = Field(default_factory=LocationModel)
    seed: Optional[int] = Field(None, description="Random seed for repeatable output")


class GenerationResponse(BaseModel):
    """Generation result"""
    data: List[Dict[str, Any]]
    count: int
    generation_time: float
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ExportRequest(WireModel):
    """Export request"""
    format: str
    data: List[Dict[str, Any]] = Field(default_factory=list)
    table_name: str = Field("GeneratedData", alias="tableName")
    filename: str = "data"


# API Endpoints

@app.get("/", tags=["General"])
async def root():
    """API root endpoint"""
    return {
        "name": "DummyForge API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "fields": "/fields",
            "countries": "/countries",
            "generate": "/generate",
            "export": "/export",
            "presets": "/presets",
        }
    }


@app.get("/health", tags=["General"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "presets_loaded": len(config_loader.list_presets()),
    }


@app.get("/fields", tags=["Catalogue"])
async def list_fields():
    """Field types grouped by category"""
    return {
        "categories": {
            category: [ft.value for ft in field_types]
            for category, field_types in FIELD_CATEGORIES.items()
        }
    }


@app.get("/countries", tags=["Catalogue"])
async def get_countries():
    """Known countries with calling codes"""
    countries = [
        {**country, "calling_code": get_calling_code(country["code"])}
        for country in list_countries()
    ]
    return {"countries": countries, "count": len(countries)}


@app.post("/generate", response_model=GenerationResponse, tags=["Generation"])
def generate_records(request: GenerationRequest, x_api_key: Optional[str] = Header(default=None)):
    """
    Generate records

    Accepts the camelCase request format; each request gets its own engine.
    """
    require_api_key(x_api_key)

    try:
        payload = request.model_dump(by_alias=True, exclude_none=True)
        payload.pop("seed", None)
        config = config_loader.load_from_dict(payload)

        generator = DataGenerator(settings=EngineSettings(seed=request.seed))
        result = generator.run(config)

        logger.info(f"Generated {len(result.records)} records in {result.generation_time:.2f}s")

        return GenerationResponse(
            data=result.records,
            count=len(result.records),
            generation_time=result.generation_time,
            metadata=result.metadata,
        )

    except DummyForgeError as e:
        raise http_error(e)


@app.post("/export", tags=["Export"])
def export_records(request: ExportRequest, x_api_key: Optional[str] = Header(default=None)):
    """
    Export records

    Supports SQL, CSV, TXT, fixed-width text, XLSX and PDF formats
    """
    require_api_key(x_api_key)

    try:
        fmt = request.format.lower()
        content = Exporter(request.table_name).export(request.data, fmt)
        filename = f"{PathManager.clean_filename(request.filename)}{EXTENSIONS[fmt]}"

        return StreamingResponse(
            io.BytesIO(content.encode() if isinstance(content, str) else content),
            media_type=MEDIA_TYPES[fmt],
            headers={"Content-Disposition": f"attachment; filename={filename}"}
        )

    except DummyForgeError as e:
        raise http_error(e)


@app.get("/presets", tags=["Configuration"])
async def list_presets():
    """
    List available request presets
    """
    presets = config_loader.list_presets()

    return {
        "presets": presets,
        "count": len(presets)
    }


@app.get("/presets/{preset_name}", tags=["Configuration"])
async def get_preset(preset_name: str):
    """
    Get a request preset in wire format
    """
    try:
        config = config_loader.load_preset(preset_name)

        return {
            "preset_name": preset_name,
            "config": generation_config_to_dict(config)
        }

    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


# Run with: uvicorn api:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
