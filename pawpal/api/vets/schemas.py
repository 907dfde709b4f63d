# pawpal/api/vets/schemas.py
from marshmallow import Schema, fields, validate, pre_load

VET_CATEGORIES = ['all', 'emergency', 'clinic']

class VetQuerySchema(Schema):
    """
    GET /api/vets/ 쿼리 파라미터 검증 스키마.
    district는 쉼표로 여러 지역을 지정할 수 있습니다 (예: Colombo,Kandy).
    """
    district = fields.List(fields.Str(validate=validate.Length(min=1)), load_default=list)
    q = fields.Str(load_default='')
    category = fields.Str(validate=validate.OneOf(VET_CATEGORIES), load_default='all')

    @pre_load
    def split_districts(self, data, **kwargs):
        # ImmutableMultiDict를 수정 가능한 딕셔너리로 변환
        processed_data = dict(data)
        if isinstance(processed_data.get('district'), str):
            processed_data['district'] = [d.strip() for d in processed_data['district'].split(',') if d.strip()]
        return processed_data

class VetCreateSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    address = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    contact = fields.Str(required=True, validate=validate.Length(min=1, max=30))
    district = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    emergency = fields.Bool(load_default=False)
    rating = fields.Float(load_default=0, validate=validate.Range(min=0, max=5))

class VetUpdateSchema(Schema):
    name = fields.Str(validate=validate.Length(min=1, max=100))
    address = fields.Str(validate=validate.Length(min=1, max=200))
    contact = fields.Str(validate=validate.Length(min=1, max=30))
    district = fields.Str(validate=validate.Length(min=1, max=50))
    emergency = fields.Bool()
    rating = fields.Float(validate=validate.Range(min=0, max=5))

class VetResponseSchema(Schema):
    id = fields.Str(dump_only=True)
    name = fields.Str()
    address = fields.Str()
    contact = fields.Str()
    district = fields.Str()
    emergency = fields.Bool()
    rating = fields.Float()

class VetStatsSchema(Schema):
    total = fields.Int()
    emergency = fields.Int()
    clinics = fields.Int()
    districts = fields.Int()
    district_breakdown = fields.Dict(keys=fields.Str(), values=fields.Int())
